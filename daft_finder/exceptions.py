"""Exception hierarchy for the Daft rental finder.

Exception Hierarchy:
    DaftFinderError (base)
    ├── NetworkError
    ├── ScraperError
    ├── ValidationError
    └── ApiError
        └── AuthError
"""

from typing import Any, Dict, Optional


class DaftFinderError(Exception):
    """Base exception for all daft_finder errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def type(self) -> str:
        return type(self).__name__

    @property
    def details(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Render the error as the envelope returned to callers."""
        return {
            "errorType": self.type,
            "message": self.message,
            "details": self.details,
        }


class NetworkError(DaftFinderError):
    """Raised when a page fetch still fails after all retries."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    @property
    def details(self) -> Dict[str, Any]:
        return {"url": self.url, "status": self.status_code}


class ScraperError(DaftFinderError):
    """Raised when the search pipeline cannot produce a result."""

    def __init__(
        self,
        message: str = "A scraping error occurred.",
        stage: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        self.stage = stage
        self.params = params or {}
        super().__init__(message)

    @property
    def details(self) -> Dict[str, Any]:
        return {"stage": self.stage, "receivedParams": self.params}


class ValidationError(DaftFinderError):
    """Raised when caller input fails schema validation."""

    def __init__(self, message: str = "A validation error occurred.", details: Optional[Dict[str, Any]] = None):
        self._details = details or {}
        super().__init__(message)

    @property
    def details(self) -> Dict[str, Any]:
        return self._details


class ApiError(DaftFinderError):
    """Raised when the Daft REST API call fails."""

    def __init__(self, message: str = "An API error occurred.", status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

    @property
    def details(self) -> Dict[str, Any]:
        return {"status": self.status_code}


class AuthError(ApiError):
    """Raised when the Daft REST API rejects our credentials."""

    pass
