"""
Exceptions raised by the court data fetcher.

Each error knows the HTTP status it maps to; the API layer turns it into
the ``{"success": false, "error": ...}`` envelope.
"""
from typing import Any, Dict, Optional


class CourtFetcherError(Exception):
    """Base exception for all fetcher errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope for JSON responses."""
        body: Dict[str, Any] = {"success": False, "error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequestError(CourtFetcherError):
    """Raised when a request body is malformed or fails validation."""

    status_code = 400


class CourtFetchError(CourtFetcherError):
    """Raised when case data cannot be fetched from the court source."""

    def __init__(self, message: str, court_name: str = "the court"):
        super().__init__(
            message,
            f"The system attempted to fetch real-time data from {court_name}. "
            "Please verify the case details and try again.",
        )


class DocumentDownloadError(CourtFetcherError):
    """Raised when an order document cannot be served."""

    def __init__(self, details: Optional[str] = None):
        super().__init__("Failed to download PDF", details or "Unknown error occurred")
