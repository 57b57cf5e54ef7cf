"""Custom exceptions for the News Shorts feed."""


class NewsAPIError(Exception):
    """Raised when NewsAPI returns an error or malformed response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(NewsAPIError):
    """Raised when NewsAPI returns a 429 rate limit response."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(message, status_code=429)


class FetchFailed(Exception):
    """Reported when a page of the feed could not be fetched or parsed."""

    def __init__(
        self,
        message: str,
        page: int,
        original_error: Exception | None = None,
    ) -> None:
        self.page = page
        self.original_error = original_error
        super().__init__(message)


class OpenFailed(Exception):
    """Raised when an article link could not be opened."""

    def __init__(self, url: str, original_error: Exception | None = None) -> None:
        self.url = url
        self.original_error = original_error
        message = f"Could not open {url}"
        if original_error is not None:
            message += f": {original_error}"
        super().__init__(message)
