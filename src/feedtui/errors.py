"""Errors raised by listing sources."""


class FeedError(Exception):
    """Base class for failures while fetching a page of a feed."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NetworkError(FeedError):
    """Connectivity problem or timeout. Retrying may succeed."""


class ApiError(FeedError):
    """The remote source rejected the request or returned an unusable payload."""

    def __init__(self, message: str, cause: BaseException | None = None, status_code: int | None = None):
        super().__init__(message, cause)
        self.status_code = status_code
