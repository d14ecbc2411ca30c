"""時間変換ユーティリティのテスト"""

from src.domain.time_utils import format_duration


class TestFormatDuration:
    """format_duration のテスト"""

    def test_zero(self) -> None:
        assert format_duration(0) == "00:00"

    def test_minutes_only(self) -> None:
        """時間が0なら MM:SS"""
        assert format_duration(600) == "10:00"
        assert format_duration(300) == "05:00"

    def test_seconds_padded(self) -> None:
        assert format_duration(65) == "01:05"

    def test_with_hours(self) -> None:
        """時間は0埋めしない"""
        assert format_duration(3725) == "1:02:05"

    def test_many_hours(self) -> None:
        assert format_duration(36000) == "10:00:00"

    def test_fraction_floored(self) -> None:
        """小数秒は切り捨て"""
        assert format_duration(599.9) == "09:59"

    def test_negative_clamped(self) -> None:
        assert format_duration(-5) == "00:00"
