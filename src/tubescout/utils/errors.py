"""Error types raised by TubeScout services."""

from typing import Optional


class TubeScoutError(Exception):
    """Base class for all TubeScout errors."""
    pass


class InvalidInputError(TubeScoutError):
    """Raised for a missing or malformed API key, query or URL."""
    pass


class NotFoundError(TubeScoutError):
    """Raised when the YouTube API returns an empty result set."""
    pass


class FilterRejectedError(TubeScoutError):
    """Raised when a single video fails the long-form/landscape checks."""
    pass


class TooShortError(FilterRejectedError):
    pass


class WrongAspectRatioError(FilterRejectedError):
    pass


class UnexpectedResponseError(TubeScoutError):
    """Raised when a payload is missing fields we depend on."""
    pass


class SummaryGenerationError(TubeScoutError):
    """Raised when the generation API fails or retries are exhausted."""
    pass


class MediaServiceError(TubeScoutError):
    """Raised when the media-resolution service can't produce links."""
    pass


class UpstreamHttpError(TubeScoutError):
    """HTTP failure from an upstream API, classified by status code."""

    BAD_REQUEST = "bad_request"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "service_unavailable"
    UNKNOWN = "unknown"

    def __init__(self, message: str, status: Optional[int] = None, category: str = UNKNOWN):
        super().__init__(message)
        self.status = status
        self.category = category
