"""Error kinds raised by the brand analysis pipeline.

Only the primary page fetch and URL normalization surface errors; stylesheet
failures and missing markup degrade the affected heuristic instead.
"""


class BrandAnalysisError(Exception):
    """Base exception for brand analysis errors."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class InvalidURLError(BrandAnalysisError):
    """Raised when the supplied string cannot be turned into an http(s) URL."""

    pass


class FetchError(BrandAnalysisError):
    """Base for failures of the primary page fetch."""

    def __init__(
        self, message: str, url: str | None = None, status_code: int | None = None
    ):
        super().__init__(message, url)
        self.status_code = status_code


class AccessBlockedError(FetchError):
    """Raised when the site answers 401/403 (automated access rejected)."""

    pass


class HostUnreachableError(FetchError):
    """Raised on DNS resolution or connection failure."""

    pass


class FetchTimeoutError(FetchError):
    """Raised when the page fetch exceeds its timeout."""

    pass


class FetchFailedError(FetchError):
    """Raised for any other HTTP status or transport error."""

    pass
