"""Detail-page enrichment.

A detail page either describes one rentable unit, in which case it only
sharpens the list-page record (coordinates, energy rating), or a
development landing page whose sub-unit links are the real listings.
"""

import logging
from dataclasses import replace
from typing import List, Union

from bs4 import Tag

from .base import ListingRecord
from .normalize import format_energy_rating
from .results import (
    absolute_url,
    extract_coordinates,
    listing_id_from_href,
    parse_unit_fields,
)
from .selectors import Selector, as_soup, extract_first

logger = logging.getLogger(__name__)

SUB_UNIT = 'a[data-testid="sub-unit"]'
SUB_UNIT_PRICE = (
    Selector('p[data-testid="mc-title"]'),
    Selector('p[class*="jmFLnF"]'),
)
SUB_UNIT_ENERGY_RATING = (
    Selector('div[data-testid="mc-ber"] div[aria-label]', attr="aria-label"),
)
DETAIL_ENERGY_RATING = (
    Selector('div[data-testid="callout-container"] [aria-label^="BER"]', attr="aria-label"),
    Selector('p[data-testid="ber"]'),
    Selector('div[data-testid="ber-container"] p'),
)

STUDIO_TYPE = "Studio"


def _parse_sub_unit(anchor: Tag, parent: ListingRecord, base_url: str) -> ListingRecord:
    href = anchor.get("href", "")
    unit = ListingRecord(
        id=listing_id_from_href(href) if href else "",
        url=absolute_url(base_url, href) if href else "",
        address=parent.address,
        tagline=parent.tagline,
        latitude=parent.latitude,
        longitude=parent.longitude,
        energy_rating=format_energy_rating(extract_first(anchor, SUB_UNIT_ENERGY_RATING)),
        **parse_unit_fields(anchor, SUB_UNIT_PRICE),
    )
    if unit.beds and unit.beds.is_studio and not unit.property_type_text:
        unit = replace(unit, property_type_text=STUDIO_TYPE)
    return unit


def _missing_fields(unit: ListingRecord) -> List[str]:
    required = {"id": unit.id, "url": unit.url, "address": unit.address, "price_text": unit.price_text}
    return [name for name, value in required.items() if not value]


def enrich_with_detail(
    record: ListingRecord,
    html: Union[str, Tag],
    base_url: str,
) -> Union[ListingRecord, List[ListingRecord]]:
    """Combine a list-page record with its detail page.

    Coordinates are always re-read from the detail page when present, as the
    list-page value may be coarse. On a development page the record is
    replaced by its sub-units; otherwise the energy rating is filled in if
    the list page had none.

    Args:
        record: Partial record from the results page
        html: Detail page HTML
        base_url: Site base URL used to absolutize sub-unit links

    Returns:
        The enriched record, or a list of sub-unit records for a development
    """
    soup = as_soup(html)
    base_url = base_url.rstrip("/")

    coords = extract_coordinates(soup)
    if coords:
        record = replace(record, latitude=coords[0], longitude=coords[1])

    anchors = soup.select(SUB_UNIT)
    logger.info(f"Found {len(anchors)} sub-units for {record.url}")

    if not anchors:
        if record.energy_rating is None:
            rating = format_energy_rating(extract_first(soup, DETAIL_ENERGY_RATING))
            if rating:
                record = replace(record, energy_rating=rating)
        return record

    units = []
    for anchor in anchors:
        unit = _parse_sub_unit(anchor, record, base_url)
        missing = _missing_fields(unit)
        if missing:
            logger.warning(
                f"Skipping sub-unit due to missing essential data: [{', '.join(missing)}]. URL: {unit.url}"
            )
            continue
        units.append(unit)

    logger.info(f"Replaced development page {record.url} with {len(units)} sub-units")
    return units
