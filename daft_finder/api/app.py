"""FastAPI application for Daft Finder."""
import logging
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from daft_finder.api.routes import properties, search
from daft_finder.exceptions import (
    ApiError,
    AuthError,
    DaftFinderError,
    NetworkError,
    ScraperError,
    ValidationError,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Daft Rental Finder",
    description="Search and filter Daft.ie rental listings",
    version="0.1.0"
)

# Checked in order, so subclasses come before their bases
ERROR_STATUS_CODES = (
    (ValidationError, 400),
    (AuthError, 401),
    (ApiError, 502),
    (NetworkError, 502),
    (ScraperError, 500),
)

# Locations FastAPI prefixes to field names in validation errors
_REQUEST_PARTS = ("body", "path", "query")


def status_code_for(exc: DaftFinderError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


@app.exception_handler(DaftFinderError)
async def daft_finder_error_handler(request: Request, exc: DaftFinderError):
    status_code = status_code_for(exc)
    logger.error(f"{request.method} {request.url.path} failed with {exc.type}: {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report schema errors in the same envelope as ValidationError."""
    details: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        details.setdefault(".".join(loc) or "__root__", []).append(error.get("msg", ""))
    validation_error = ValidationError("Invalid request parameters", details=details)
    return JSONResponse(status_code=400, content=validation_error.to_dict())


# API Routes
app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(properties.router, prefix="/api/properties", tags=["properties"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
