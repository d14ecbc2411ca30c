"""分P情報取得インターフェース"""

from typing import Protocol

from src.domain.entities import Part


class PartFetcher(Protocol):
    """分P情報取得のインターフェース"""

    def fetch_parts(self, bvid: str) -> list[Part]:
        """
        動画の分Pリストを取得

        Args:
            bvid: 正規化済みのBV号

        Returns:
            取得順の Part リスト

        Raises:
            UpstreamError: 通信エラー、非200応答、APIエラーコード
            EmptyResultError: 分Pが0件
        """
        ...
