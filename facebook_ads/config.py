"""FacebookAds — Central Configuration via Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings loaded from environment variables / .env file."""

    # ── Graph API ──
    meta_access_token: str = ""
    meta_app_secret: Optional[str] = None
    meta_api_version: str = "v21.0"
    meta_base_url: str = "https://graph.facebook.com"
    meta_base_uri: str = ""  # Full override of base_url/api_version

    # ── HTTP ──
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_base_delay: float = 2.0  # seconds, doubled per attempt

    # ── Pagination ──
    max_pages: int = 50
    default_page_limit: int = 100

    # ── App ──
    log_level: str = "INFO"

    @property
    def base_uri(self) -> str:
        """Return the override if set, otherwise host + version."""
        if self.meta_base_uri:
            return self.meta_base_uri.rstrip("/")
        return f"{self.meta_base_url.rstrip('/')}/{self.meta_api_version}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


def get_base_uri() -> str:
    return settings.base_uri


def set_base_uri(uri: str) -> None:
    """Point every subsequent request at a different Graph host/version."""
    settings.meta_base_uri = uri.rstrip("/")
