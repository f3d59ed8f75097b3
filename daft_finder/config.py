from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the DAFT_ prefix.
    Example: DAFT_MAX_PAGES=10
    """
    model_config = {"env_prefix": "DAFT_"}

    # Site and API endpoints
    base_url: str = "https://www.daft.ie"
    api_base_url: str = "https://api.daft.ie/v3"
    api_key: Optional[str] = None

    # Scraping configuration
    max_pages: int = 5  # Safety limit for pagination
    results_per_page: int = 20
    max_fetch_retries: int = 2
    retry_delay: float = 2.0
    request_timeout: float = 10.0
    page_delay: float = 1.5  # Before fetching page 2 onwards
    detail_delay: float = 0.5  # Before each detail-page fetch
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36"
    )

    # Logging configuration
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    # API server configuration
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def site_base_url(self) -> str:
        """Base URL without a trailing slash, for joining relative paths."""
        return self.base_url.rstrip("/")


settings = Settings()
