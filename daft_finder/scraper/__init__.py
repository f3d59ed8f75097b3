"""Daft.ie rental listing scraper.

Turns search criteria into listing records: builds the search URL, crawls
the result pages and each listing's detail page, and normalizes the
scraped text into typed fields.

Main exports:
- HtmlScraper: Crawls result and detail pages
- PageFetcher: HTTP GET with retries
- ListingRecord, SearchCriteria: Data models
- PriceKind, BedsRange: Normalized field types

Example usage:
    from daft_finder.scraper import HtmlScraper, SearchCriteria

    scraper = HtmlScraper()
    criteria = SearchCriteria(locations=("Dublin 4",), max_price=2500, num_beds=2)
    listings = scraper.crawl(criteria)

SearchOrchestrator (daft_finder.scraper.orchestrator) adds filtering and
error reporting on top of the crawl.
"""

from .base import (
    BedsRange,
    ListingRecord,
    ParsedPrice,
    PriceKind,
    SearchCriteria,
    flatten_listing,
)
from .fetch import PageFetcher
from .html import HtmlScraper, build_search_url

__all__ = [
    # Main interface
    "HtmlScraper",
    "PageFetcher",
    "build_search_url",
    # Data models
    "ListingRecord",
    "SearchCriteria",
    "BedsRange",
    "ParsedPrice",
    # Enums
    "PriceKind",
    # Helpers
    "flatten_listing",
]
