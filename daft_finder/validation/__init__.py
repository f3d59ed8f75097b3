"""Request validation using Pydantic models.

Main exports:
- SearchRequest: Validated search parameters
- DetailsRequest: Validated details parameters
- parse_search_request / parse_details_request: Validate raw payloads,
  raising daft_finder.exceptions.ValidationError

Example usage:
    from daft_finder.validation import parse_search_request

    request = parse_search_request({"location": "Ringsend", "max_price": 2500})
    criteria = request.to_criteria()
"""

from .models import DetailsRequest, SearchRequest, parse_details_request, parse_search_request

__all__ = [
    "SearchRequest",
    "DetailsRequest",
    "parse_search_request",
    "parse_details_request",
]
