"""Search-results page extraction.

Parses one results page into partial ListingRecords and derives the total
page count from the "of N total results" banner. Every field is read
through a selector chain (see selectors.py) so a single markup change only
costs the primary selector, not the field.
"""

import logging
import math
import re
from typing import List, Optional, Tuple, Union
from urllib.parse import urljoin, urlparse

from bs4 import Tag

from .base import ListingRecord, PriceKind
from .normalize import extract_lat_lng, format_energy_rating, parse_beds, parse_price, slugify
from .selectors import Selector, as_soup, extract_first, select_first

logger = logging.getLogger(__name__)

RESULTS_PER_PAGE = 20
CARD_ID_PREFIX = "result-"
_TOTAL_RESULTS_RE = re.compile(r"of\s*([\d,]+)\s*total results", re.IGNORECASE)


def looks_like_price(text: str) -> bool:
    return (
        "€" in text
        or re.search(r"per (month|week)", text, re.IGNORECASE) is not None
        or re.search(r"POA|price on application", text, re.IGNORECASE) is not None
    )


def looks_like_beds(text: str) -> bool:
    return re.match(r"^\d+\s*Bed", text, re.IGNORECASE) is not None or "studio" in text.lower()


def looks_like_baths(text: str) -> bool:
    return re.match(r"^\d+\s*Bath", text, re.IGNORECASE) is not None


def is_property_type_word(text: str) -> bool:
    return text.lower() in ("apartment", "house", "studio", "flat")


def mentions_total_results(text: str) -> bool:
    return _TOTAL_RESULTS_RE.search(text) is not None


# Page structure
RESULTS_CONTAINER = ('ul[data-testid="results"]',)
RESULT_CARD = 'li[data-testid^="result-"]'
TOTAL_RESULTS = (
    Selector("span.sc-4c172e97-0.ioLdWh", accept=mentions_total_results),
    Selector("h1, span, p", accept=mentions_total_results),
)

# Card fields
ADDRESS = (
    Selector('div[data-tracking="srp_address"] p'),
    Selector('[data-testid="address"]'),
)
TAGLINE = (
    Selector('div[data-tracking="srp_tagline"] p'),
    Selector('[data-testid="tagline"]'),
)
CARD_LINK = (
    Selector('a[data-testid="card-link"]', attr="href"),
    Selector("a.sc-e4e4a161-16.dukjos", attr="href"),
)
PRICE = (
    Selector('p[data-testid="price"]'),
    Selector('[class*="TitleBlock__StyledSpan"][class*="price"]'),
    Selector("p.csEcJw"),
    Selector('div[data-testid="card-price"] p'),
    Selector('p[class^="sc-4c172e97-0"]', accept=looks_like_price),
)
BEDS = (
    Selector('[data-testid="beds"]'),
    Selector("p, span, li", accept=looks_like_beds),
)
BATHS = (
    Selector('[data-testid="baths"]'),
    Selector("p, span, li", accept=looks_like_baths),
)
PROPERTY_TYPE = (
    Selector('[data-testid="property-type"]'),
    Selector("p, span, li", accept=is_property_type_word),
)
ENERGY_RATING = (
    Selector('div[data-testid="callout-container"] [aria-label^="BER"]', attr="aria-label"),
    Selector('div[data-tracking="srp_ber"]', attr="aria-label"),
    Selector('p[data-testid="ber"]'),
)
MAP_CONTAINER = ("div.sc-eb305aa9-35.jfAOAq",)
MAP_LINKS = ('a[data-testid="satelite-button"]', 'a[data-testid="streetview-button"]')

# Units listed on a multi-unit card, and sub-units on a development page
UNIT_LINKS = 'a[href*="/for-rent/"]'
UNIT_PRICE = (
    Selector('p[class*="jmFLnF"]'),
    Selector('p[data-testid="mc-title"]'),
    Selector("p", accept=looks_like_price),
)
UNIT_BEDS = (
    Selector('div[class*="eKLMRy"] span[data-testid="mc-details-first-item"]'),
    Selector('[data-testid="mc-details-first-item"]'),
    Selector('div[class*="kzXTWf"] span', index=0),
)
UNIT_BATHS = (
    Selector('div[class*="eKLMRy"] span[data-testid="mc-details-second-item"]'),
    Selector('[data-testid="mc-details-second-item"]'),
    Selector('div[class*="kzXTWf"] span', index=1),
)
UNIT_PROPERTY_TYPE = (
    Selector('div[class*="eKLMRy"] span[data-testid="mc-details-third-item"]'),
    Selector('[data-testid="mc-details-third-item"]'),
    Selector('div[class*="kzXTWf"] span', index=2),
)


def absolute_url(base_url: str, href: str) -> str:
    return urljoin(base_url, href)


def listing_id_from_href(href: str) -> str:
    """Trailing path segment of a listing URL, e.g. ".../apartment/123" -> "123"."""
    return urlparse(href).path.rstrip("/").rsplit("/", 1)[-1]


def extract_coordinates(node: Tag) -> Optional[Tuple[float, float]]:
    """Read (lat, lng) from the map links under node."""
    container = select_first(node, MAP_CONTAINER) or node
    for link_css in MAP_LINKS:
        coords = extract_lat_lng(container, link_css)
        if coords:
            return coords
    return None


def has_results(html: Union[str, Tag]) -> bool:
    """Whether the page carries a results list at all."""
    return select_first(as_soup(html), RESULTS_CONTAINER) is not None


def get_total_pages(
    html: Union[str, Tag],
    results_per_page: int = RESULTS_PER_PAGE,
    max_pages: int = 5,
) -> int:
    """Derive the page count from the "of N total results" text.

    Args:
        html: First results page
        results_per_page: Listings the site shows per page
        max_pages: Safety cap on pagination

    Returns:
        ceil(N / results_per_page) capped at max_pages, or 1 if N is unavailable
    """
    text = extract_first(as_soup(html), TOTAL_RESULTS)
    logger.info(f"Found total results string: {text!r}")

    match = _TOTAL_RESULTS_RE.search(text)
    if not match:
        logger.warning("Could not determine total results. Assuming 1 page.")
        return 1

    total_results = int(match.group(1).replace(",", ""))
    calculated = math.ceil(total_results / results_per_page)
    total_pages = max(1, min(calculated, max_pages))
    if calculated > max_pages:
        logger.warning(
            f"Calculated total pages ({calculated}) exceeds max_pages ({max_pages}). "
            f"Capping at {total_pages}."
        )
    logger.info(
        f"Total results: {total_results}, calculated pages: {calculated}, "
        f"effective total pages: {total_pages}"
    )
    return total_pages


def parse_unit_fields(node: Tag, price_chain=UNIT_PRICE) -> dict:
    """Price/beds/baths/type fields of a unit link, as ListingRecord kwargs."""
    price_text = extract_first(node, price_chain)
    price = parse_price(price_text)
    beds_text = extract_first(node, UNIT_BEDS)
    return {
        "price_text": price_text,
        "price_value": price.value,
        "price_kind": price.kind,
        "beds_text": beds_text,
        "beds": parse_beds(beds_text),
        "baths_text": extract_first(node, UNIT_BATHS),
        "property_type_text": extract_first(node, UNIT_PROPERTY_TYPE),
    }


def _parse_card_units(card: Tag, base_url: str, card_href: str) -> List[ListingRecord]:
    units = []
    for container in card.find_all("div", attrs={"data-testid": "card-container"}, recursive=False):
        for link in container.select(UNIT_LINKS):
            href = link.get("href", "")
            if not href or href == card_href:
                continue
            unit = ListingRecord(
                id=listing_id_from_href(href),
                url=absolute_url(base_url, href),
                **parse_unit_fields(link),
            )
            if unit.id and unit.url:
                units.append(unit)
    return units


def parse_card(card: Tag, base_url: str) -> ListingRecord:
    """Extract one listing card into a partial record."""
    address = extract_first(card, ADDRESS)

    url = ""
    listing_id = ""
    href = extract_first(card, CARD_LINK)
    if href:
        url = absolute_url(base_url, href)
        listing_id = listing_id_from_href(href)

    if not listing_id:
        test_id = card.get("data-testid", "")
        if test_id:
            listing_id = test_id.replace(CARD_ID_PREFIX, "", 1)

    if not url and listing_id and address:
        url = f"{base_url}/for-rent/{slugify(address)}/{listing_id}"

    price_text = extract_first(card, PRICE)
    price = parse_price(price_text)
    beds_text = extract_first(card, BEDS)
    fields = {
        "price_text": price_text,
        "price_value": price.value,
        "price_kind": price.kind,
        "beds_text": beds_text,
        "beds": parse_beds(beds_text),
        "property_type_text": extract_first(card, PROPERTY_TYPE),
    }

    units = _parse_card_units(card, base_url, href)
    if units:
        first = units[0]
        if fields["price_kind"] == PriceKind.UNKNOWN or fields["price_value"] is None:
            fields.update(
                price_text=first.price_text,
                price_value=first.price_value,
                price_kind=first.price_kind,
            )
        if fields["beds"] is None:
            fields.update(beds=first.beds, beds_text=first.beds_text)
        if not fields["property_type_text"]:
            fields["property_type_text"] = first.property_type_text

    coords = extract_coordinates(card)
    return ListingRecord(
        id=listing_id,
        url=url,
        address=address,
        tagline=extract_first(card, TAGLINE),
        baths_text=extract_first(card, BATHS),
        energy_rating=format_energy_rating(extract_first(card, ENERGY_RATING)),
        latitude=coords[0] if coords else None,
        longitude=coords[1] if coords else None,
        units=tuple(units),
        **fields,
    )


def parse_search_results(html: Union[str, Tag], base_url: str) -> List[ListingRecord]:
    """Parse every listing card on a results page, in page order.

    Args:
        html: Results page HTML
        base_url: Site base URL used to absolutize card links

    Returns:
        Partial records; empty if the page has no results list
    """
    container = select_first(as_soup(html), RESULTS_CONTAINER)
    if container is None:
        return []

    cards = container.select(RESULT_CARD)
    logger.info(f"Found {len(cards)} listing cards")
    return [parse_card(card, base_url.rstrip("/")) for card in cards]
