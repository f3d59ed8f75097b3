"""Page fetcher: one HTTP GET with browser-like headers and bounded retries."""

import logging
import threading
from typing import Dict, Optional

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from daft_finder.config import Settings, settings as default_settings
from daft_finder.exceptions import NetworkError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches raw HTML from the site.

    Sends a fixed desktop-browser header set with a search-engine referer.
    Transport errors and non-2xx responses are retried with a fixed delay;
    a 404 means the page does not exist and yields "" without retrying.
    """

    ACCEPT = (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    )
    REFERER = "https://www.google.com/"

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        """Initialize the fetcher.

        Args:
            config: Settings providing timeout, retry count, retry delay and user agent
            session: HTTP session shared by every caller (if None, each thread
                gets its own session on first use)
        """
        self._config = config or default_settings
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        if not hasattr(self._local, "session"):
            self._local.session = requests.Session()
        return self._local.session

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Accept": self.ACCEPT,
            "Accept-Encoding": "gzip, deflate",
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": self.REFERER,
        }

    def fetch(self, url: str, label: Optional[str] = None) -> str:
        """Fetch a page, retrying transient failures.

        Args:
            url: Absolute URL to fetch
            label: Human-readable page name for logs and errors (e.g. "page 2")

        Returns:
            The page HTML, or "" if the page does not exist (404)

        Raises:
            NetworkError: If every attempt failed
        """
        label = label or url
        attempts = self._config.max_fetch_retries + 1

        @retry(
            retry=retry_if_exception_type(requests.RequestException),
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(self._config.retry_delay),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        def _fetch():
            return self._get_once(url, label)

        try:
            return _fetch()
        except requests.RequestException as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Max retries reached for {label} ({attempts} attempts). Giving up.")
            raise NetworkError(
                f"Failed to fetch {label} after {attempts} attempts: {e}",
                url=url,
                status_code=status,
            ) from e

    def _get_once(self, url: str, label: str) -> str:
        logger.info(f"Fetching {label} from {url}")
        try:
            response = self.session.get(
                url,
                headers=self.headers,
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error fetching {label}: {e}")
            raise

        if response.status_code == 404:
            logger.warning(f"{label} not found (404): {url}. Skipping.")
            return ""

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"Error fetching {label}: {e}")
            raise

        logger.info(f"Fetched {label} successfully. Status: {response.status_code}")
        return response.text
