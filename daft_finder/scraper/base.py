"""Data models shared by the extraction pipeline and the filter engine."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

Number = Union[int, float]


class PriceKind(str, Enum):
    """How a listing's price text was interpreted."""
    NUMERIC = "numeric"
    ON_APPLICATION = "on_application"
    UNKNOWN = "unknown"


class ParsedPrice(NamedTuple):
    """Result of parsing a price string.

    value is the monthly amount for NUMERIC prices and None otherwise.
    """
    value: Optional[Number]
    kind: PriceKind


@dataclass(frozen=True)
class BedsRange:
    """Bedroom count range; a single count has min == max."""
    min: int
    max: int
    is_studio: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"min": self.min, "max": self.max}
        if self.is_studio:
            data["isStudio"] = True
        return data


@dataclass(frozen=True)
class SearchCriteria:
    """User search parameters. Immutable for the lifetime of one search."""
    locations: Tuple[str, ...] = ()
    min_price: Optional[Number] = None
    max_price: Optional[Number] = None
    num_beds: Optional[int] = None
    property_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Parameters as received, for error reports and logging."""
        return {
            "location": list(self.locations),
            "min_price": self.min_price,
            "max_price": self.max_price,
            "num_beds": self.num_beds,
            "property_type": self.property_type,
        }


@dataclass(frozen=True)
class ListingRecord:
    """One rentable unit scraped from the site.

    Records are built once from list-page data and then replaced (never
    mutated) by the detail enricher. A record carrying units is a
    development aggregate and is expanded before output.
    """
    id: str = ""
    url: str = ""
    address: str = ""
    tagline: str = ""

    # Price
    price_text: str = ""
    price_value: Optional[Number] = None
    price_kind: PriceKind = PriceKind.UNKNOWN

    # Rooms and type
    beds_text: str = ""
    beds: Optional[BedsRange] = None
    baths_text: str = ""
    property_type_text: str = ""

    # Detail-page fields
    energy_rating: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    units: Tuple["ListingRecord", ...] = field(default=())

    @property
    def is_complete(self) -> bool:
        """Whether the record carries enough identity to be returned."""
        return bool(self.id and self.url and self.address)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase shape returned to callers."""
        data: Dict[str, Any] = {
            "id": self.id,
            "url": self.url,
            "address": self.address,
            "tagline": self.tagline,
            "priceString": self.price_text,
            "parsedPrice": self.price_value,
            "priceType": self.price_kind.value,
            "bedsString": self.beds_text,
            "parsedBeds": self.beds.to_dict() if self.beds else None,
            "bathsString": self.baths_text,
            "propertyTypeString": self.property_type_text,
        }
        if self.energy_rating is not None:
            data["ber"] = self.energy_rating
        if self.latitude is not None and self.longitude is not None:
            data["latitude"] = self.latitude
            data["longitude"] = self.longitude
        if self.units:
            data["units"] = [unit.to_dict() for unit in self.units]
        return data


def flatten_listing(record: ListingRecord) -> List[ListingRecord]:
    """Expand a development aggregate into one record per unit.

    Units inherit address, tagline and coordinates from the parent where
    they have none of their own. Records without units are returned as-is.
    """
    if not record.units:
        return [record]

    return [
        replace(
            unit,
            address=unit.address or record.address,
            tagline=unit.tagline or record.tagline,
            latitude=unit.latitude if unit.latitude is not None else record.latitude,
            longitude=unit.longitude if unit.longitude is not None else record.longitude,
            units=(),
        )
        for unit in record.units
    ]
