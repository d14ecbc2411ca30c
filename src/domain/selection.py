"""分P範囲選択と時長集計のルール（純粋関数）"""

from collections.abc import Sequence

from src.domain.entities import (
    DEFAULT_SPEED,
    MIN_SPEED,
    DerivedDurations,
    InputFocus,
    Part,
    SelectionWindow,
)
from src.domain.exceptions import RangeConstraintViolation

FROM_EXCEEDS_TO_MESSAGE = "開始Pは終了Pより後にできません"
TO_PRECEDES_FROM_MESSAGE = "終了Pは開始Pより前にできません"


def compute_durations(
    parts: Sequence[Part],
    from_page: int,
    to_page: int,
    speed: float,
) -> DerivedDurations:
    """
    選択範囲 [from_page, to_page] の合計時長を計算

    Args:
        parts: 分Pリスト（取得順）
        from_page: 開始P（1始まり、含む）
        to_page: 終了P（1始まり、含む）
        speed: 再生速度

    Returns:
        DerivedDurations(total=合計秒, adjusted=total / speed)
    """
    total = sum(part.duration for part in parts[from_page - 1 : to_page])
    return DerivedDurations(total=total, adjusted=total / speed)


def _parse_int(raw: str) -> int | None:
    text = raw.strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    # "3.0" のような数値入力も許容する
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def _parse_float(raw: str) -> float | None:
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if value != value:  # NaN
        return None
    return value


def commit_from(raw: str, parts_count: int) -> int:
    """
    開始P入力を確定

    空・不正・1未満なら1、それ以外は [1, parts_count] にクランプ
    """
    upper = max(parts_count, 1)
    value = _parse_int(raw)
    if value is None or value < 1:
        return 1
    return min(value, upper)


def commit_to(raw: str, from_page: int, parts_count: int) -> int:
    """
    終了P入力を確定

    空・不正・from_page未満なら from_page、それ以外は [from_page, parts_count] にクランプ
    """
    upper = max(parts_count, from_page, 1)
    value = _parse_int(raw)
    if value is None or value < from_page:
        return from_page
    return min(value, upper)


def commit_speed(raw: str) -> float:
    """
    倍速入力を確定

    空・不正・0.1未満なら1.0、上限なし
    """
    value = _parse_float(raw)
    if value is None or value < MIN_SPEED:
        return DEFAULT_SPEED
    return max(MIN_SPEED, value)


def select_by_click(
    window: SelectionWindow,
    index: int,
    focus: InputFocus,
) -> SelectionWindow:
    """
    リストクリックによる範囲更新

    Args:
        window: 現在の選択範囲
        index: クリックされた分Pの0始まり index
        focus: 現在のフォーカス

    Returns:
        新しい選択範囲（変化がなければ同じ window）

    Raises:
        RangeConstraintViolation: from <= to が破られる場合
    """
    page = index + 1

    if focus is InputFocus.FROM:
        if page > window.to_page:
            raise RangeConstraintViolation(FROM_EXCEEDS_TO_MESSAGE)
        return SelectionWindow(from_page=page, to_page=window.to_page)

    if focus is InputFocus.TO:
        if page < window.from_page:
            raise RangeConstraintViolation(TO_PRECEDES_FROM_MESSAGE)
        return SelectionWindow(from_page=window.from_page, to_page=page)

    # フォーカスなし: 1クリック目で単一選択、2クリック目で終了Pまで拡張
    if window.is_single and window.from_page == page:
        return window
    if not window.is_single or page < window.from_page:
        return SelectionWindow(from_page=page, to_page=page)
    return SelectionWindow(from_page=window.from_page, to_page=page)
