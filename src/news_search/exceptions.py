from __future__ import annotations

GENERIC_FETCH_MESSAGE = "Failed to fetch news. Please try again later."


class NewsSearchError(Exception):
    """Base class for errors shown to the user in the error banner."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(NewsSearchError):
    """Raised when a search term is empty or too short; no request is made."""


class FetchError(NewsSearchError):
    """Raised when a news request could not produce a page of articles."""


class ApiStatusError(FetchError):
    """Raised when the API answers with a non-2xx HTTP status."""

    def __init__(self, status_code: int):
        super().__init__(f"API Error: {status_code}")
        self.status_code = status_code


class ApiMessageError(FetchError):
    """Raised when a 2xx response reports a failure in its own status field."""

    def __init__(self, message: str | None = None, code: str | None = None):
        super().__init__(message or "Failed to fetch news")
        self.code = code


class NetworkError(FetchError):
    """Raised on transport-level failures (offline, DNS, timeouts)."""

    def __init__(self, message: str = GENERIC_FETCH_MESSAGE):
        super().__init__(message)
