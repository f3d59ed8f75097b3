"""Client for the Daft.ie REST API (v3).

The API requires a key (DAFT_API_KEY) that is not issued for general use.
Without one, calls are expected to fail with 401/403; search does not
depend on this client.
"""

import logging
from typing import Any, Dict, Optional

import requests

from daft_finder.config import Settings, settings as default_settings
from daft_finder.exceptions import ApiError, AuthError

logger = logging.getLogger(__name__)


class DaftApiClient:
    """Thin wrapper around the listing details endpoint."""

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self._config = config or default_settings
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

        if self._config.api_key:
            self._session.headers["Authorization"] = f"Bearer {self._config.api_key}"
            logger.info("DAFT_API_KEY found, Authorization header will be used for API calls.")
        else:
            logger.info("DAFT_API_KEY not found. API calls may be unauthorized and fail.")

    @property
    def base_url(self) -> str:
        return self._config.api_base_url.rstrip("/")

    def get_listing(self, listing_id: str) -> Dict[str, Any]:
        """Fetch one listing's details.

        Args:
            listing_id: Daft listing ID

        Returns:
            The JSON body as returned by the API

        Raises:
            AuthError: If the API rejects the credentials (401/403)
            ApiError: On any other HTTP or transport failure
        """
        url = f"{self.base_url}/listings/{listing_id}"
        logger.info(f"Fetching details for property ID {listing_id} from {url}")

        try:
            response = self._session.get(url, timeout=self._config.request_timeout)
        except requests.RequestException as e:
            logger.error(f"Daft.ie API request for property ID {listing_id!r} failed: {e}")
            raise ApiError(f"Daft.ie API request for property ID {listing_id!r} failed: {e}") from e

        if response.status_code in (401, 403):
            logger.error(f"Daft.ie API rejected credentials for property ID {listing_id!r}: {response.status_code}")
            raise AuthError(
                f"Daft.ie API authorization failed for property ID {listing_id!r}. "
                "A valid DAFT_API_KEY is required.",
                status_code=response.status_code,
            )

        try:
            response.raise_for_status()
            data = response.json()
        except (requests.HTTPError, ValueError) as e:
            logger.error(f"Daft.ie API error for property ID {listing_id!r}: {e}")
            raise ApiError(
                f"Daft.ie API error for property ID {listing_id!r}: {e}",
                status_code=response.status_code,
            ) from e

        logger.info(f"API call for property ID {listing_id} successful. Status: {response.status_code}")
        return data
