# Infrastructure Layer
from src.infrastructure.bilibili_api import BilibiliPageListClient
from src.infrastructure.timer_slot import ThreadingTimerSlot

__all__ = [
    "BilibiliPageListClient",
    "ThreadingTimerSlot",
]
