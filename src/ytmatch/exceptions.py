"""Custom exceptions for ytmatch.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks like FastAPI.
"""


class YTMatchError(Exception):
    """Base exception for ytmatch.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class APIError(YTMatchError):
    """YouTube Music API error.

    Raised when the underlying search request fails (network, server or
    client error reported by ytmusicapi).
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class CandidateParseError(YTMatchError):
    """Search response could not be parsed into candidates.

    Raised when a search result is missing required fields or has
    unexpected types.
    """

    status_code: int = 502  # Bad Gateway (upstream returned garbage)


class CSVParseError(YTMatchError):
    """Failed to read the exported track list.

    Raised for unreadable files or unknown column references.
    """

    status_code: int = 400  # Bad Request


class CollectionWriteError(YTMatchError):
    """Failed to persist the resolved collection."""

    status_code: int = 500  # Internal Server Error


class CancellationError(YTMatchError):
    """Operation was cancelled.

    Raised when an import is cancelled via a CancelToken.
    """

    status_code: int = 499  # Client Closed Request (nginx convention)
