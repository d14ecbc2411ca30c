"""ThreadingTimerSlot のテスト"""

import threading

from src.infrastructure.timer_slot import ThreadingTimerSlot


class TestThreadingTimerSlot:
    """単発タイマーのテスト"""

    def test_fires_callback(self) -> None:
        slot = ThreadingTimerSlot()
        fired = threading.Event()
        slot.start(0.01, fired.set)
        assert fired.wait(2.0)
        assert not slot.is_pending

    def test_cancel(self) -> None:
        slot = ThreadingTimerSlot()
        fired = threading.Event()
        slot.start(0.2, fired.set)
        assert slot.is_pending
        slot.cancel()
        assert not slot.is_pending
        assert not fired.wait(0.4)

    def test_restart_supersedes_previous(self) -> None:
        """新しい start は保留中のタイマーを取り消す"""
        slot = ThreadingTimerSlot()
        first = threading.Event()
        second = threading.Event()
        slot.start(0.2, first.set)
        slot.start(0.01, second.set)
        assert second.wait(2.0)
        assert not first.wait(0.4)
