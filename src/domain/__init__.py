# Domain Layer
from src.domain.entities import (
    DerivedDurations,
    InputFocus,
    Part,
    SelectionWindow,
    SessionSnapshot,
)
from src.domain.exceptions import (
    EmptyResultError,
    InputValidationError,
    PartsDurationError,
    RangeConstraintViolation,
    SearchInProgressError,
    UpstreamError,
)
from src.domain.identifier import extract_bvid, require_bvid
from src.domain.selection import compute_durations
from src.domain.time_utils import format_duration

__all__ = [
    "Part",
    "SelectionWindow",
    "DerivedDurations",
    "InputFocus",
    "SessionSnapshot",
    "PartsDurationError",
    "InputValidationError",
    "UpstreamError",
    "EmptyResultError",
    "RangeConstraintViolation",
    "SearchInProgressError",
    "extract_bvid",
    "require_bvid",
    "compute_durations",
    "format_duration",
]
