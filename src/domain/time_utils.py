"""時間変換ユーティリティ"""

import math


def format_duration(seconds: float) -> str:
    """
    秒を H:MM:SS 形式に変換（時間が0なら MM:SS）

    Example:
        600 → "10:00"
        300 → "05:00"
        3725 → "1:02:05"
    """
    total = max(0, math.floor(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
