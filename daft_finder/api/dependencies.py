"""Shared FastAPI dependencies."""

from functools import lru_cache

from daft_finder.config import settings
from daft_finder.scraper.orchestrator import SearchOrchestrator


@lru_cache(maxsize=1)
def get_orchestrator() -> SearchOrchestrator:
    """Return the process-wide orchestrator (override in tests)."""
    return SearchOrchestrator(settings)
