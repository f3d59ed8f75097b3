"""HTML crawler for Daft.ie rental search results."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple, Union
from urllib.parse import urlencode

from daft_finder.config import Settings, settings as default_settings
from daft_finder.exceptions import NetworkError

from .base import ListingRecord, Number, SearchCriteria, flatten_listing
from .detail import enrich_with_detail
from .fetch import PageFetcher
from .normalize import generate_location_slug, slugify
from .results import get_total_pages, has_results, parse_search_results
from .selectors import as_soup

logger = logging.getLogger(__name__)

SEARCH_ROOT = "/property-for-rent"
DEFAULT_LOCATION = "ireland"

# Property types whose plural is not simply "<slug>s"
PROPERTY_TYPE_PATHS = {
    "apartment": "apartments",
    "house": "houses",
}


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def build_search_url(criteria: SearchCriteria, base_url: str) -> str:
    """Build the first results-page URL for a search.

    A single location becomes a path segment; several locations are sent as
    repeated "location" query parameters since the path holds only one area.

    Args:
        criteria: Search parameters
        base_url: Site base URL, e.g. "https://www.daft.ie"

    Returns:
        Absolute search URL without a page parameter

    Example:
        >>> build_search_url(SearchCriteria(locations=("Dublin 4",), num_beds=2), "https://www.daft.ie")
        'https://www.daft.ie/property-for-rent/dublin-4-dublin?numBeds_from=2&numBeds_to=2'
    """
    path = f"{SEARCH_ROOT}/{DEFAULT_LOCATION}"
    query: List[Tuple[str, str]] = []

    locations = [loc for loc in criteria.locations if loc and loc.strip()]
    if len(locations) == 1:
        slug = generate_location_slug(locations[0])
        if slug:
            path = f"{SEARCH_ROOT}/{slug}"
    elif len(locations) > 1:
        for location in locations:
            slug = generate_location_slug(location)
            if slug:
                query.append(("location", slug))

    if criteria.property_type:
        type_slug = slugify(criteria.property_type)
        if type_slug:
            path += "/" + PROPERTY_TYPE_PATHS.get(type_slug, f"{type_slug}s")

    if criteria.min_price is not None:
        query.append(("rentalPrice_from", _format_number(criteria.min_price)))
    if criteria.max_price is not None:
        query.append(("rentalPrice_to", _format_number(criteria.max_price)))
    if criteria.num_beds is not None:
        # No "exactly N beds" filter on the site; an equal range stands in for it
        query.append(("numBeds_from", str(criteria.num_beds)))
        query.append(("numBeds_to", str(criteria.num_beds)))

    url = f"{base_url.rstrip('/')}{path}"
    if query:
        url += "?" + urlencode(query)
    return url


def page_url(search_url: str, page: int) -> str:
    """URL of the given results page; page 1 is the search URL itself."""
    if page == 1:
        return search_url
    separator = "&" if "?" in search_url else "?"
    return f"{search_url}{separator}page={page}"


class HtmlScraper:
    """Crawls result pages and their listings' detail pages.

    Pages are fetched one at a time. The detail pages of one results page
    are fetched concurrently, each after its own fixed delay.
    """

    def __init__(self, config: Optional[Settings] = None, fetcher: Optional[PageFetcher] = None):
        """Initialize the crawler.

        Args:
            config: Settings providing base URL, pagination limits and delays
            fetcher: Page fetcher (one is built from config if None)
        """
        self._config = config or default_settings
        self._fetcher = fetcher or PageFetcher(self._config)

    @property
    def base_url(self) -> str:
        return self._config.site_base_url

    def crawl(self, criteria: SearchCriteria) -> List[ListingRecord]:
        """Collect every listing for the search, before filtering.

        Args:
            criteria: Search parameters

        Returns:
            Flattened records that carry an id, url and address

        Raises:
            NetworkError: If the first results page could not be fetched
        """
        search_url = build_search_url(criteria, self.base_url)
        logger.info(f"Constructed base search URL: {search_url}")

        records: List[ListingRecord] = []
        current_page = 1
        total_pages = 1

        while current_page <= total_pages:
            label = f"page {current_page}"
            url = page_url(search_url, current_page)

            if current_page == 1:
                html = self._fetcher.fetch(url, label)
            else:
                time.sleep(self._config.page_delay)
                try:
                    html = self._fetcher.fetch(url, label)
                except NetworkError as e:
                    logger.error(f"Failed to fetch {label}, returning results gathered so far: {e}")
                    break

            soup = as_soup(html)
            if current_page == 1:
                total_pages = get_total_pages(
                    soup,
                    results_per_page=self._config.results_per_page,
                    max_pages=self._config.max_pages,
                )

            if not has_results(soup):
                logger.warning(f"No results container found on {label}. Stopping.")
                break

            listings = parse_search_results(soup, self.base_url)
            if not listings:
                logger.info(f"No listings found on {label}. Stopping.")
                break

            page_records = self._enrich_page(listings)
            logger.info(f"Collected {len(page_records)} listings from {label}")
            records.extend(page_records)
            current_page += 1

        logger.info(f"Crawl finished with {len(records)} listings")
        return records

    def _enrich_page(self, listings: List[ListingRecord]) -> List[ListingRecord]:
        with ThreadPoolExecutor(max_workers=len(listings)) as pool:
            enriched = list(pool.map(self._enrich_listing, listings))

        records = []
        for result in enriched:
            for record in result if isinstance(result, list) else [result]:
                for flat in flatten_listing(record):
                    if flat.is_complete:
                        records.append(flat)
                    else:
                        logger.warning(
                            f"Dropping listing without id, url or address: "
                            f"id={flat.id!r} url={flat.url!r}"
                        )
        return records

    def _enrich_listing(self, record: ListingRecord) -> Union[ListingRecord, List[ListingRecord]]:
        """Fetch and apply a listing's detail page, keeping list data on failure."""
        if not record.url:
            return record

        time.sleep(self._config.detail_delay)
        try:
            html = self._fetcher.fetch(record.url, f"details for {record.id}")
            if not html:
                return record
            return enrich_with_detail(record, html, self.base_url)
        except Exception as e:
            logger.error(f"Failed to enrich listing {record.url}, using list-page data: {e}")
            return record
