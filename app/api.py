"""分P情報 JSON API（FastAPI）エントリーポイント"""

import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from src.application.interfaces.part_fetcher import PartFetcher
from src.domain.exceptions import InputValidationError, UpstreamError
from src.domain.identifier import require_bvid
from src.domain.selection import commit_from, commit_speed, commit_to, compute_durations
from src.domain.time_utils import format_duration
from src.infrastructure.bilibili_api import BilibiliPageListClient
from src.infrastructure.logging_config import get_logger, parse_log_level, setup_logging

logger = get_logger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: Settings | None = None,
    fetcher: PartFetcher | None = None,
) -> FastAPI:
    """
    API アプリケーションを組み立て

    Args:
        settings: 設定（省略時は get_settings()）
        fetcher: 分P取得クライアント（省略時は BilibiliPageListClient）
    """
    settings = settings or get_settings()
    if fetcher is None:
        fetcher = BilibiliPageListClient(
            base_url=settings.BILIBILI_API_BASE_URL,
            timeout=settings.API_TIMEOUT,
            user_agent=settings.USER_AGENT,
            debug=settings.DEBUG,
        )

    app = FastAPI(title="Bilibili 多P時長計算器")
    app.state.settings = settings
    app.state.fetcher = fetcher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    def _fetch(url: str | None) -> list | JSONResponse:
        if not url:
            logger.info("[API] url パラメータなし")
            return _error("'url' パラメータがありません", 400)
        try:
            bvid = require_bvid(url)
        except InputValidationError as e:
            logger.info(f"[API] 無効な入力: {url!r}")
            return _error(str(e), 400)

        logger.info(f"[API] リクエスト受信: {bvid}")
        try:
            return fetcher.fetch_parts(bvid)
        except UpstreamError as e:
            return _error(str(e), e.status_code)

    @app.get("/bilibili-parts")
    def bilibili_parts(url: str | None = Query(default=None)):
        result = _fetch(url)
        if isinstance(result, JSONResponse):
            return result
        logger.info(f"[API] {len(result)}件の分Pを返却")
        return {"parts": [part.to_dict() for part in result]}

    @app.get("/api/durations")
    def durations(
        url: str | None = Query(default=None),
        from_page: str = Query(default="1", alias="from"),
        to_page: str = Query(default="", alias="to"),
        speed: str = Query(default="1"),
    ):
        result = _fetch(url)
        if isinstance(result, JSONResponse):
            return result

        count = len(result)
        start = commit_from(from_page, count)
        # 終了P省略時は全選択
        end = commit_to(to_page or str(count), start, count)
        rate = commit_speed(speed)
        derived = compute_durations(result, start, end, rate)
        return {
            "from": start,
            "to": end,
            "speed": rate,
            "part_count": count,
            "total_duration": derived.total,
            "adjusted_total_duration": derived.adjusted,
            "total_formatted": format_duration(derived.total),
            "adjusted_formatted": format_duration(derived.adjusted),
        }

    return app


def main() -> None:
    """uvicorn で API サーバーを起動"""
    load_dotenv(project_root / ".env")
    settings = get_settings()
    setup_logging(level=parse_log_level(settings.LOG_LEVEL))
    logger.info(f"API サーバー起動: port={settings.PORT}")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
