"""ドメイン固有の例外定義"""


class PartsDurationError(Exception):
    """基底例外クラス"""

    pass


class InputValidationError(PartsDurationError):
    """入力からBV号を抽出できない（上流APIは呼ばない）"""

    pass


class UpstreamError(PartsDurationError):
    """
    分P情報の取得失敗（通信エラー、非200応答、APIエラーコード等）

    status_code は JSON API 層で応答ステータスとしてそのまま使う
    """

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(UpstreamError):
    """上流は成功したが分Pが0件"""

    def __init__(self, message: str = "この動画の分P情報が見つかりません", status_code: int = 404):
        super().__init__(message, status_code=status_code)


class RangeConstraintViolation(PartsDurationError):
    """クリック選択が from <= to を破る"""

    pass


class SearchInProgressError(PartsDurationError):
    """検索リクエストが処理中"""

    pass
