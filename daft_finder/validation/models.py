"""Pydantic models for validating search and details requests.

These mirror the parameters accepted by the HTTP API and the CLI. Models
clean their input (whitespace, blank locations) and enforce cross-field
rules before anything is sent to the site.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator, model_validator

from daft_finder.exceptions import ValidationError
from daft_finder.scraper.base import SearchCriteria


class SearchRequest(BaseModel):
    """Validated search parameters.

    Example:
        request = SearchRequest(
            location=["Ringsend", "Dublin 4"],
            max_price=2500,
            num_beds=2,
        )
        criteria = request.to_criteria()
    """

    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "example": {
                "location": "Dublin 4",
                "min_price": 1500,
                "max_price": 2500,
                "num_beds": 2,
                "property_type": "apartment",
            }
        },
    }

    location: Optional[Union[str, List[str]]] = Field(
        None, description="Location, or several locations matched with OR"
    )
    min_price: Optional[float] = Field(None, ge=0, description="Minimum monthly rent in euros")
    max_price: Optional[float] = Field(None, ge=0, description="Maximum monthly rent in euros")
    num_beds: Optional[int] = Field(None, ge=0, description="Exact number of bedrooms")
    property_type: Optional[str] = Field(None, description="Property type, e.g. apartment or house")

    @field_validator("location", mode="before")
    @classmethod
    def drop_blank_locations(cls, v):
        """Strip location strings and drop the empty ones."""
        if v is None:
            return None
        if isinstance(v, str):
            return v.strip() or None
        if isinstance(v, (list, tuple)):
            return [item.strip() for item in v if isinstance(item, str) and item.strip()]
        return v

    @field_validator("property_type", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def validate_price_range(self):
        """Ensure the price range is not inverted."""
        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError(
                    f"min_price ({self.min_price}) cannot exceed max_price ({self.max_price})"
                )
        return self

    @property
    def locations(self) -> List[str]:
        if self.location is None:
            return []
        if isinstance(self.location, str):
            return [self.location]
        return list(self.location)

    def to_criteria(self) -> SearchCriteria:
        """Convert to the immutable criteria used by the scraper."""
        return SearchCriteria(
            locations=tuple(self.locations),
            min_price=self.min_price,
            max_price=self.max_price,
            num_beds=self.num_beds,
            property_type=self.property_type,
        )


class DetailsRequest(BaseModel):
    """Validated details request."""

    model_config = {"str_strip_whitespace": True}

    property_id: str = Field(..., min_length=1, description="Daft listing ID")

    @field_validator("property_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric IDs as well as strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


def _error_details(error: PydanticValidationError) -> Dict[str, List[str]]:
    details: Dict[str, List[str]] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "__root__"
        details.setdefault(field, []).append(item["msg"])
    return details


def _parse(model, payload: Optional[Dict[str, Any]], label: str):
    try:
        return model.model_validate(payload or {})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {label} parameters", details=_error_details(e)) from e


def parse_search_request(payload: Optional[Dict[str, Any]]) -> SearchRequest:
    """Validate raw search parameters.

    Raises:
        ValidationError: With per-field messages if the payload is invalid
    """
    return _parse(SearchRequest, payload, "search")


def parse_details_request(payload: Optional[Dict[str, Any]]) -> DetailsRequest:
    """Validate raw details parameters.

    Raises:
        ValidationError: With per-field messages if the payload is invalid
    """
    return _parse(DetailsRequest, payload, "details")
