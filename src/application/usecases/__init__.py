# Use Cases
from src.application.usecases.duration_session import (
    DurationSession,
    DurationSessionConfig,
)

__all__ = [
    "DurationSession",
    "DurationSessionConfig",
]
