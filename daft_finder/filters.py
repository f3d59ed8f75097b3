"""Post-crawl filtering of listings against search criteria.

The site's own filters are applied through the search URL, but its results
are not exact (developments span several bed counts and prices, and area
pages include neighbouring districts), so every criterion is re-checked
here. All criteria must hold; an unset criterion always passes.
"""

import logging
import re
from typing import Iterable, List

from daft_finder.scraper.base import ListingRecord, PriceKind, SearchCriteria

logger = logging.getLogger(__name__)

_POSTAL_DISTRICT_RE = re.compile(r"dublin\s*(\d+)", re.IGNORECASE)

# Ringsend straddles Dublin 2 and Dublin 4
RINGSEND = "ringsend"
RINGSEND_SYNONYMS = ("ringsend", "irishtown", "grand canal dock", "dublin 4", "dublin 2")
RINGSEND_ABBREVIATIONS = re.compile(r"\bd[24]\b", re.IGNORECASE)


def _matches_price(record: ListingRecord, criteria: SearchCriteria) -> bool:
    if criteria.min_price is None and criteria.max_price is None:
        return True
    if record.price_kind != PriceKind.NUMERIC or record.price_value is None:
        return False
    if criteria.min_price is not None and record.price_value < criteria.min_price:
        return False
    if criteria.max_price is not None and record.price_value > criteria.max_price:
        return False
    return True


def _matches_beds(record: ListingRecord, criteria: SearchCriteria) -> bool:
    if criteria.num_beds is None:
        return True
    if record.beds is None:
        return False
    return record.beds.min <= criteria.num_beds <= record.beds.max


def _matches_property_type(record: ListingRecord, criteria: SearchCriteria) -> bool:
    if not criteria.property_type:
        return True
    if not record.property_type_text:
        return False
    return criteria.property_type.lower() in record.property_type_text.lower()


def matches_location(address: str, location: str) -> bool:
    """Whether an address lies in the requested location.

    Besides a plain substring match, "Dublin N" also matches the short
    form "DN", and "Ringsend" matches its neighbouring areas and districts.

    Args:
        address: Listing address
        location: Requested location, e.g. "Dublin 4" or "Ringsend"

    Returns:
        True if the address matches
    """
    address = (address or "").lower()
    location = location.lower().strip()
    if not address:
        return False

    if location == RINGSEND:
        return (
            any(term in address for term in RINGSEND_SYNONYMS)
            or RINGSEND_ABBREVIATIONS.search(address) is not None
        )

    if location in address:
        return True

    district = _POSTAL_DISTRICT_RE.search(location)
    if district:
        number = district.group(1)
        return f"dublin {number}" in address or re.search(rf"\bd{number}\b", address) is not None
    return False


def _matches_locations(record: ListingRecord, criteria: SearchCriteria) -> bool:
    requested = [loc for loc in criteria.locations if loc and loc.strip()]
    if not requested:
        return True
    if not record.address:
        return False
    return any(matches_location(record.address, location) for location in requested)


def matches_criteria(record: ListingRecord, criteria: SearchCriteria) -> bool:
    """Whether a single record satisfies every criterion."""
    return (
        _matches_price(record, criteria)
        and _matches_beds(record, criteria)
        and _matches_property_type(record, criteria)
        and _matches_locations(record, criteria)
    )


def filter_listings(records: Iterable[ListingRecord], criteria: SearchCriteria) -> List[ListingRecord]:
    """Keep the records matching criteria, preserving order.

    Args:
        records: Flattened listings from a crawl
        criteria: Search parameters

    Returns:
        Matching records
    """
    records = list(records)
    matched = [record for record in records if matches_criteria(record, criteria)]
    logger.info(f"Filtered {len(records)} scraped listings down to {len(matched)}")
    return matched
