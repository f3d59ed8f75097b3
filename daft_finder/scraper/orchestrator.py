"""Search orchestration: crawl, filter and report failures as ScraperError."""

import logging
from typing import Any, Dict, List, Optional

from daft_finder.config import Settings, settings as default_settings
from daft_finder.daft_api import DaftApiClient
from daft_finder.exceptions import DaftFinderError, NetworkError, ScraperError
from daft_finder.filters import filter_listings

from .base import ListingRecord, SearchCriteria
from .html import HtmlScraper

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Entry point for the search and details operations.

    Example:
        orchestrator = SearchOrchestrator()
        listings = orchestrator.search(SearchCriteria(locations=("Ringsend",), max_price=2500))
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        scraper: Optional[HtmlScraper] = None,
        api_client: Optional[DaftApiClient] = None,
    ):
        """Initialize orchestrator.

        Args:
            config: Settings shared by the crawler and API client
            scraper: Crawler (built from config if None)
            api_client: REST client for details (created on first use if None)
        """
        self._config = config or default_settings
        self.scraper = scraper or HtmlScraper(self._config)
        self._api_client = api_client

    @property
    def api_client(self) -> DaftApiClient:
        if self._api_client is None:
            self._api_client = DaftApiClient(self._config)
        return self._api_client

    def search(self, criteria: SearchCriteria) -> List[ListingRecord]:
        """Run a full search.

        Args:
            criteria: Search parameters

        Returns:
            Matching listings, possibly empty

        Raises:
            ScraperError: If the first results page could not be fetched or
                the crawl failed unexpectedly
        """
        params = criteria.to_dict()
        logger.info(f"Received search parameters: {params}")

        try:
            records = self.scraper.crawl(criteria)
        except NetworkError as e:
            logger.error(f"Critical failure: failed to fetch initial page for location {params['location']}: {e}")
            raise ScraperError(
                f"Failed to fetch initial page for location: {params['location']}. {e.message}",
                stage="fetch_initial_page",
                params=params,
            ) from e
        except DaftFinderError:
            raise
        except Exception as e:
            logger.exception(f"Error during scraping Daft.ie for {params['location']}: {e}")
            raise ScraperError(
                f"Error during scraping Daft.ie for {params['location']}: {e}",
                stage="orchestration",
                params=params,
            ) from e

        results = filter_listings(records, criteria)
        logger.info(f"Search complete: {len(records)} scraped, {len(results)} after filters")
        return results

    def get_details(self, listing_id: str) -> Dict[str, Any]:
        """Fetch a listing's raw details from the REST API.

        Raises:
            AuthError: If no valid API key is configured
            ApiError: On any other API failure
        """
        return self.api_client.get_listing(listing_id)
