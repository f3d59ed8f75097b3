"""Property detail endpoint."""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from daft_finder.api.dependencies import get_orchestrator
from daft_finder.scraper.orchestrator import SearchOrchestrator
from daft_finder.validation import parse_details_request

router = APIRouter()


@router.get("/{property_id}")
def get_property(
    property_id: str,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Get a listing's details from the Daft.ie REST API.

    Requires DAFT_API_KEY; without it the API answers 401/403 and this
    endpoint returns an AuthError envelope.
    """
    request = parse_details_request({"property_id": property_id})
    return orchestrator.get_details(request.property_id)
