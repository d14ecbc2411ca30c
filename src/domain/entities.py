"""ドメインエンティティ定義"""

from dataclasses import dataclass
from enum import Enum

MIN_SPEED = 0.1
DEFAULT_SPEED = 1.0


@dataclass(frozen=True)
class Part:
    """多P動画の1分P"""

    cid: int
    page: int
    title: str
    duration: int  # 秒

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError("duration must be non-negative")

    def to_dict(self) -> dict[str, int | str]:
        """JSON 応答用"""
        return {
            "cid": self.cid,
            "page": self.page,
            "title": self.title,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class SelectionWindow:
    """選択範囲 [from_page, to_page]（1始まり、両端含む）"""

    from_page: int = 1
    to_page: int = 1

    def __post_init__(self) -> None:
        if self.from_page < 1:
            raise ValueError("from_page must be >= 1")
        if self.to_page < self.from_page:
            raise ValueError("to_page must be >= from_page")

    @classmethod
    def select_all(cls, parts_count: int) -> "SelectionWindow":
        """全分Pを選択した範囲"""
        return cls(from_page=1, to_page=max(parts_count, 1))

    @property
    def is_single(self) -> bool:
        return self.from_page == self.to_page


@dataclass(frozen=True)
class DerivedDurations:
    """選択範囲の合計時長（常に入力から再計算される）"""

    total: int
    adjusted: float


class InputFocus(Enum):
    """次のリストクリックがどちらの境界を更新するか"""

    NONE = "none"
    FROM = "from"
    TO = "to"


@dataclass(frozen=True)
class SessionSnapshot:
    """UIに渡す状態のスナップショット"""

    parts: tuple[Part, ...]
    from_page: int
    to_page: int
    speed: float
    from_input: str
    to_input: str
    speed_input: str
    focus: InputFocus
    total_duration: int
    adjusted_total_duration: float
    is_loading: bool
    error_message: str | None
    toast_message: str | None

    @property
    def has_parts(self) -> bool:
        return bool(self.parts)

    def is_selected(self, index: int) -> bool:
        """0始まりの index の分Pが選択範囲内か"""
        return self.from_page - 1 <= index <= self.to_page - 1
