"""Rental search endpoint."""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from daft_finder.api.dependencies import get_orchestrator
from daft_finder.scraper.orchestrator import SearchOrchestrator
from daft_finder.validation import SearchRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
def search_properties(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Search Daft.ie rentals.

    Crawls the matching result pages and their detail pages, then applies
    the price, beds, property type and location filters. Developments are
    returned as one entry per unit.
    """
    results = orchestrator.search(request.to_criteria())
    return {
        "count": len(results),
        "results": [record.to_dict() for record in results],
    }
