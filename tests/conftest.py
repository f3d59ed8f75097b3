"""Shared fixtures for the test suite."""

from unittest.mock import MagicMock

import pytest

from daft_finder.config import Settings
from daft_finder.scraper.base import BedsRange, ListingRecord, PriceKind, SearchCriteria

BASE_URL = "https://www.daft.ie"


@pytest.fixture
def test_settings():
    """Settings with no delays and no API key."""
    return Settings(
        base_url=BASE_URL,
        page_delay=0,
        detail_delay=0,
        retry_delay=0,
        max_fetch_retries=2,
        max_pages=5,
        api_key=None,
    )


@pytest.fixture
def mock_fetcher():
    """A PageFetcher stand-in whose pages are served from a dict by URL."""
    fetcher = MagicMock()
    fetcher.pages = {}

    def fetch(url, label=None):
        page = fetcher.pages.get(url, "")
        if isinstance(page, Exception):
            raise page
        return page

    fetcher.fetch.side_effect = fetch
    return fetcher


@pytest.fixture
def criteria():
    """Default search criteria for testing."""
    return SearchCriteria(locations=("Dublin 4",), max_price=2500, num_beds=2)


def make_listing(
    listing_id="1001",
    address="12 Bath Avenue, Sandymount, Dublin 4",
    price=2000,
    price_kind=PriceKind.NUMERIC,
    beds=(2, 2),
    property_type="Apartment",
    **kwargs,
) -> ListingRecord:
    """Factory for creating test ListingRecord instances."""
    defaults = dict(
        id=listing_id,
        url=f"{BASE_URL}/for-rent/apartment-{listing_id}/{listing_id}",
        address=address,
        price_text=f"€{price:,} per month" if price is not None else "Price on Application",
        price_value=price,
        price_kind=price_kind if price is not None else PriceKind.ON_APPLICATION,
        beds_text=f"{beds[0]} Bed" if beds else "",
        beds=BedsRange(min=beds[0], max=beds[1]) if beds else None,
        property_type_text=property_type,
    )
    defaults.update(kwargs)
    return ListingRecord(**defaults)


# HTML builders mirroring the site's markup


def card_html(
    listing_id="1001",
    address="12 Bath Avenue, Sandymount, Dublin 4",
    tagline="Bright apartment near the DART",
    price="€2,000 per month",
    beds="2 Bed",
    baths="1 Bath",
    property_type="Apartment",
    ber="BER B2",
    href=None,
    extra="",
) -> str:
    """One results-page listing card."""
    if href is None:
        href = f"/for-rent/apartment-{listing_id}/{listing_id}"
    body = (
        f'<div data-tracking="srp_address"><p>{address}</p></div>'
        f'<div data-tracking="srp_tagline"><p>{tagline}</p></div>'
        f'<p data-testid="price">{price}</p>'
        f'<span data-testid="beds">{beds}</span>'
        f'<span data-testid="baths">{baths}</span>'
        f'<span data-testid="property-type">{property_type}</span>'
    )
    if ber:
        body += f'<div data-testid="callout-container"><div aria-label="{ber}"></div></div>'
    if href:
        body = f'<a data-testid="card-link" href="{href}">{body}</a>'
    return f'<li data-testid="result-{listing_id}">{body}{extra}</li>'


def results_page(cards, total=None) -> str:
    """A search-results page holding the given cards."""
    banner = ""
    if total is not None:
        banner = f'<span class="sc-4c172e97-0 ioLdWh">Showing 1 - 20 of {total:,} total results</span>'
    return (
        f"<html><body><h1>{banner}</h1>"
        f'<ul data-testid="results">{"".join(cards)}</ul>'
        f"</body></html>"
    )


def map_links_html(lat=53.3358, lng=-6.2298) -> str:
    """The satellite and street-view buttons of a detail page."""
    return (
        '<div class="sc-eb305aa9-35 jfAOAq">'
        f'<a data-testid="satelite-button" href="https://www.google.com/maps/search/?api=1&amp;query=loc:{lat}+{lng}">Satellite</a>'
        f'<a data-testid="streetview-button" href="https://www.google.com/maps/@?api=1&amp;map_action=pano&amp;viewpoint={lat},{lng}">Street View</a>'
        "</div>"
    )


def sub_unit_html(
    listing_id,
    price="€2,100 per month",
    beds="1 Bed",
    baths="1 Bath",
    property_type="Apartment",
    ber=None,
    href=None,
) -> str:
    """One sub-unit link on a development page."""
    if href is None:
        href = f"/for-rent/the-quay-apartment-{listing_id}/{listing_id}"
    ber_html = ""
    if ber:
        ber_html = f'<div data-testid="mc-ber"><div aria-label="{ber}"></div></div>'
    return (
        f'<a data-testid="sub-unit" href="{href}">'
        f'<p data-testid="mc-title">{price}</p>'
        '<div class="sc-1a2b3c eKLMRy">'
        f'<span data-testid="mc-details-first-item">{beds}</span>'
        f'<span data-testid="mc-details-second-item">{baths}</span>'
        f'<span data-testid="mc-details-third-item">{property_type}</span>'
        "</div>"
        f"{ber_html}"
        "</a>"
    )


def detail_page(lat=53.3358, lng=-6.2298, ber=None, sub_units=()) -> str:
    """A listing detail page, optionally a development with sub-units."""
    ber_html = f'<p data-testid="ber">{ber}</p>' if ber else ""
    coords = map_links_html(lat, lng) if lat is not None else ""
    return f"<html><body>{coords}{ber_html}{''.join(sub_units)}</body></html>"
