"""単発タイマーのインターフェース"""

from typing import Callable, Protocol


class TimerSlot(Protocol):
    """
    同時に1つだけ保留できる単発タイマー

    start() は保留中のタイマーを取り消してから新しく開始する
    """

    def start(self, delay_sec: float, callback: Callable[[], None]) -> None:
        ...

    def cancel(self) -> None:
        ...

    @property
    def is_pending(self) -> bool:
        ...
