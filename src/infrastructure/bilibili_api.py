"""Bilibili pagelist API クライアント"""

import httpx

from src.domain.entities import Part
from src.domain.exceptions import EmptyResultError, UpstreamError
from src.infrastructure.logging_config import LogContext, get_logger

logger = get_logger(__name__)

PAGELIST_PATH = "/x/player/pagelist"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class BilibiliPageListClient:
    """非公式 pagelist API を使用した分P情報取得"""

    def __init__(
        self,
        base_url: str = "https://api.bilibili.com",
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        debug: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            base_url: APIのベースURL
            timeout: リクエストタイムアウト（秒）
            user_agent: User-Agent ヘッダー
            debug: True の場合のみ生レスポンスをログ出力
            transport: httpx トランスポート（テスト用に差し替え可能）
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self.debug = debug
        self.transport = transport

    def fetch_parts(self, bvid: str) -> list[Part]:
        """
        動画の分Pリストを取得

        Args:
            bvid: 正規化済みのBV号

        Returns:
            取得順の Part リスト

        Raises:
            UpstreamError: 通信エラー(503)、非200応答(502)、JSON不正(500)、APIエラーコード(502)
            EmptyResultError: 分Pが0件(404)
        """
        ctx = LogContext(bvid=bvid)
        url = f"{self.base_url}{PAGELIST_PATH}"
        headers = {
            "User-Agent": self.user_agent,
            "Referer": f"https://www.bilibili.com/video/{bvid}",
        }
        logger.info(f"[Bilibili] 分P取得開始 | {ctx}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url, params={"bvid": bvid}, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"[Bilibili] 接続失敗: {e} | {ctx}")
            raise UpstreamError(
                "Bilibili API に接続できないか、タイムアウトしました", status_code=503
            ) from e

        ctx = ctx.update(status=response.status_code)
        logger.info(f"[Bilibili] 応答受信 | {ctx}")
        if self.debug:
            logger.debug(f"[Bilibili] 生レスポンス: {response.text}")

        if response.status_code != httpx.codes.OK:
            logger.error(
                f"[Bilibili] 非200応答: {response.status_code}, body={response.text[:200]!r} | {ctx}"
            )
            raise UpstreamError(
                f"Bilibili API エラー、ステータスコード: {response.status_code}",
                status_code=502,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"[Bilibili] JSON解析失敗: {e}, body={response.text[:200]!r} | {ctx}")
            raise UpstreamError("Bilibili データの解析に失敗しました", status_code=500) from e

        if not isinstance(payload, dict):
            raise UpstreamError("Bilibili データの解析に失敗しました", status_code=500)

        code = payload.get("code", 0)
        if code != 0:
            message = payload.get("message", "")
            logger.error(f"[Bilibili] APIエラーコード: {code}, message={message!r} | {ctx}")
            raise UpstreamError(
                f"Bilibili API エラー: {message} (Code: {code})", status_code=502
            )

        parts = self._parse_parts(payload.get("data") or [])
        if not parts:
            logger.warning(f"[Bilibili] 分Pが0件 | {ctx}")
            raise EmptyResultError()

        logger.info(f"[Bilibili] 取得完了: {len(parts)}件 | {ctx}")
        return parts

    def _parse_parts(self, items: list[dict]) -> list[Part]:
        """pagelist の data 配列を Part に変換（"part" が分Pタイトル）"""
        try:
            return [
                Part(
                    cid=int(item.get("cid", 0)),
                    page=int(item.get("page", index + 1)),
                    title=str(item.get("part", "")),
                    duration=int(item.get("duration", 0)),
                )
                for index, item in enumerate(items)
            ]
        except (TypeError, ValueError, AttributeError) as e:
            raise UpstreamError("Bilibili データの解析に失敗しました", status_code=500) from e
