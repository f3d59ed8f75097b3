"""Text normalizers: turn scraped strings into typed values.

Handles the formats the site renders inconsistently:
- Prices: "€2,500 per month", "€500 p/w", "€800pm", "Price on Application"
- Beds: "2 Beds", "1-2 Beds", "2 to 3 bed", "Studio"
- Energy ratings: "BER B2", "SI_666" (exempt)
- Map links carrying "loc:<lat>+<lng>" or "viewpoint=<lat>,<lng>"
"""

import logging
import math
import re
from typing import Optional, Tuple, Union

from bs4 import Tag

from .base import BedsRange, Number, ParsedPrice, PriceKind
from .locations import DUBLIN_AREAS
from .selectors import as_soup

logger = logging.getLogger(__name__)

CURRENCY_SYMBOL = "€"

_PERIOD = r"month|week|mth|wk|pm|p/m|pw|p/w|perweek"
_WEEKLY_PERIODS = ("pw", "p/w", "perweek")

# Amount, optionally prefixed by the currency and followed by a period
_PRICE_RE = re.compile(
    r"(?:€\s*)?([\d,]+(?:\.\d{2})?)\s*(?:(?:per\s*)?(" + _PERIOD + r"))?",
    re.IGNORECASE,
)
# Whole string must be "<amount><period>"
_STRICT_PRICE_RE = re.compile(
    r"^([\d,]+(?:\.\d{2})?)\s*(?:per\s*)?(" + _PERIOD + r")$",
    re.IGNORECASE,
)
_BARE_AMOUNT_RE = re.compile(r"[\d.,€\s]*\d[\d.,€\s]*")
_ON_APPLICATION = ("price on application", "contact agent")

_BED_RANGE_RE = re.compile(r"(\d+)\s*(?:to|-)\s*(\d+)\s*bed", re.IGNORECASE)
_BED_SINGLE_RE = re.compile(r"(\d+)\s*bed", re.IGNORECASE)

_SATELLITE_RE = re.compile(r"loc:([\d.-]+)\+([\d.-]+)")
_STREET_VIEW_RE = re.compile(r"viewpoint=([\d.-]+),([\d.-]+)")

EXEMPT_BER_CODE = "SI_666"

UNKNOWN_PRICE = ParsedPrice(None, PriceKind.UNKNOWN)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_number(value: float) -> Number:
    return int(value) if value.is_integer() else value


def _parse_amount(raw: str) -> Optional[float]:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


def _is_weekly(period: str) -> bool:
    period = period.lower()
    return period.startswith("week") or period.startswith("wk") or period in _WEEKLY_PERIODS


def _monthly(amount: float, period: str) -> ParsedPrice:
    if _is_weekly(period):
        return ParsedPrice(_round_half_up(amount * 52 / 12), PriceKind.NUMERIC)
    return ParsedPrice(_as_number(amount), PriceKind.NUMERIC)


def parse_price(text: Optional[str]) -> ParsedPrice:
    """Parse a price string into a monthly amount.

    The checks run in a fixed order:
    1. "price on application" / "contact agent" -> ON_APPLICATION
    2. amount with an optional period; weekly amounts become monthly,
       an amount with no period counts only if the currency is present
    3. the whole string as "<amount><period>"
    4. a bare amount, accepted with the currency or when >= 100
       (smaller bare numbers look like postal districts, e.g. "Dublin 4")

    Args:
        text: Raw price text

    Returns:
        ParsedPrice with a monthly value, or no value for non-numeric kinds

    Example:
        >>> parse_price("€500 per week")
        ParsedPrice(value=2167, kind=<PriceKind.NUMERIC: 'numeric'>)
    """
    if not text or not isinstance(text, str):
        return UNKNOWN_PRICE

    lower = text.lower()
    if any(marker in lower for marker in _ON_APPLICATION):
        return ParsedPrice(None, PriceKind.ON_APPLICATION)

    match = _PRICE_RE.search(lower)
    if match:
        amount = _parse_amount(match.group(1))
        if amount is None:
            return UNKNOWN_PRICE
        if match.group(2):
            return _monthly(amount, match.group(2))
        if CURRENCY_SYMBOL in lower:
            return ParsedPrice(_as_number(amount), PriceKind.NUMERIC)

    strict = _STRICT_PRICE_RE.match(lower.strip())
    if strict:
        amount = _parse_amount(strict.group(1))
        if amount is None:
            return UNKNOWN_PRICE
        return _monthly(amount, strict.group(2))

    if _BARE_AMOUNT_RE.fullmatch(text.strip()):
        amount = _parse_amount(re.sub(r"[^\d.]", "", text))
        if amount is not None:
            if CURRENCY_SYMBOL in text or amount >= 100:
                return ParsedPrice(_as_number(amount), PriceKind.NUMERIC)
            logger.debug("Rejecting ambiguous bare number as price: %r", text)

    return UNKNOWN_PRICE


def parse_beds(text: Optional[str]) -> Optional[BedsRange]:
    """Parse bedroom text ("2 Beds", "1-2 Beds", "Studio") into a range."""
    if not text or not isinstance(text, str):
        return None

    lower = text.lower()
    if "studio" in lower:
        return BedsRange(min=1, max=1, is_studio=True)

    match = _BED_RANGE_RE.search(lower)
    if match:
        first, second = int(match.group(1)), int(match.group(2))
        return BedsRange(min=min(first, second), max=max(first, second))

    match = _BED_SINGLE_RE.search(lower)
    if match:
        count = int(match.group(1))
        return BedsRange(min=count, max=count)

    return None


def slugify(text) -> str:
    """Lowercase, hyphenate whitespace and drop anything outside [a-z0-9-]."""
    if not isinstance(text, str):
        return ""
    slug = re.sub(r"\s+", "-", text.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def generate_location_slug(location) -> str:
    """Build the site's location path segment from free text.

    Examples:
        "Carrigaline, Cork" -> "carrigaline-cork"
        "Dublin 2"          -> "dublin-2-dublin"
        "Sandymount"        -> "sandymount-dublin"
        "Galway"            -> "galway"
        "a, b, c"           -> "a-b-c"

    Only a two-part "area, county" input is joined part by part. Any other
    comma count falls through to slugify on the whole string, which drops
    the commas and keeps every part.
    """
    if not isinstance(location, str) or not location.strip():
        return ""

    parts = [slug for slug in (slugify(part) for part in location.split(",")) if slug]
    if len(parts) == 2:
        return "-".join(parts)

    slug = slugify(location)
    if re.fullmatch(r"dublin-\d+", slug):
        return f"{slug}-dublin"
    if slug in DUBLIN_AREAS:
        return f"{slug}-dublin"
    return slug


def extract_lat_lng(html: Union[str, Tag], selector: str) -> Optional[Tuple[float, float]]:
    """Read (lat, lng) from the href of the map link matched by selector.

    Args:
        html: HTML fragment or an already-parsed element
        selector: CSS selector for the map link

    Returns:
        (latitude, longitude), or None if the link or coordinates are missing
    """
    link = as_soup(html).select_one(selector)
    href = link.get("href") if link is not None else None
    if not href:
        return None

    match = _SATELLITE_RE.search(href) or _STREET_VIEW_RE.search(href)
    if not match:
        return None

    try:
        lat, lng = float(match.group(1)), float(match.group(2))
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return lat, lng


def format_energy_rating(text: Optional[str]) -> Optional[str]:
    """Normalize a BER label: "BER B2" -> "B2", "SI_666" -> "Exempt"."""
    if not text:
        return None
    cleaned = re.sub(r"^\s*BER\s+", "", text).strip()
    if not cleaned:
        return None
    if cleaned == EXEMPT_BER_CODE:
        return "Exempt"
    return cleaned
