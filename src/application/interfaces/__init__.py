# Application Interfaces (Protocols)
from src.application.interfaces.part_fetcher import PartFetcher
from src.application.interfaces.timer_slot import TimerSlot

__all__ = [
    "PartFetcher",
    "TimerSlot",
]
