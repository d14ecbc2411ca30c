"""threading.Timer ベースの単発タイマー"""

import threading
from typing import Callable


class ThreadingTimerSlot:
    """
    保留できるタイマーを1つに限定した threading.Timer ラッパー

    start() は保留中のタイマーを取り消してから開始する（後勝ち）
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def start(self, delay_sec: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(delay_sec, self._fire, args=(callback,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def _fire(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        callback()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def is_pending(self) -> bool:
        with self._lock:
            return self._timer is not None
