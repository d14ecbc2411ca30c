"""設定管理"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # Upstream (Bilibili 非公式 pagelist API)
    BILIBILI_API_BASE_URL: str = "https://api.bilibili.com"
    API_TIMEOUT: int = 10  # 秒
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # Selection / UI
    # トースト表示の自動消去までの時間（秒）
    TOAST_DURATION_SEC: float = 3.0
    # フォーカス喪失後、リストクリックを旧フォーカスで受け付ける猶予（秒）
    BLUR_GRACE_SEC: float = 0.2

    # JSON API サーバー
    PORT: int = 2323
    # カンマ区切り。"*" で全許可
    ALLOWED_ORIGINS: str = "http://localhost:2233"

    # Logging
    LOG_LEVEL: str = "INFO"
    # True の場合のみ上流APIの生レスポンスをログ出力
    DEBUG: bool = False

    def get_allowed_origins(self) -> list[str]:
        """ALLOWED_ORIGINS をリストに分解"""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
