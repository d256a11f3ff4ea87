"""Custom exception hierarchy for ThreadScribe."""


class ThreadScribeError(Exception):
    """Base exception for all ThreadScribe errors."""

    def __init__(self, message: str = "An error occurred in ThreadScribe"):
        self.message = message
        super().__init__(self.message)


class ExtractionError(ThreadScribeError):
    """Base exception for fatal extraction errors."""

    def __init__(self, message: str = "Failed to extract the thread"):
        super().__init__(message)


class MissingPostError(ExtractionError):
    """The root post container is absent from the page."""

    def __init__(self, message: str = "Could not find the main post element"):
        super().__init__(message)


class MissingCommentContainerError(ExtractionError):
    """The comment tree container is absent from the page."""

    def __init__(self, message: str = "Could not find the comment tree"):
        super().__init__(message)


class RunInProgressError(ThreadScribeError):
    """An export was triggered while another one is still running."""

    def __init__(self, message: str = "An export is already running"):
        super().__init__(message)


class NetworkError(ThreadScribeError):
    """Base exception for network-related errors."""

    def __init__(self, message: str = "A network error occurred"):
        super().__init__(message)


class PageFetchError(NetworkError):
    """Error fetching a thread page."""

    def __init__(self, message: str = "Failed to fetch the thread page"):
        super().__init__(message)


class RateLimitError(NetworkError):
    """HTTP 429 - Rate limit exceeded."""

    def __init__(self, message: str = "Reddit rate limit exceeded"):
        super().__init__(message)


class PageNotFoundError(NetworkError):
    """HTTP 404 - Thread does not exist."""

    def __init__(self, message: str = "Thread page not found"):
        super().__init__(message)


class PageForbiddenError(NetworkError):
    """HTTP 403 - Thread is private or restricted."""

    def __init__(self, message: str = "Thread page is private or restricted"):
        super().__init__(message)


class DataError(ThreadScribeError):
    """Base exception for data-related errors."""

    def __init__(self, message: str = "A data error occurred"):
        super().__init__(message)


class ConfigError(DataError):
    """Configuration is invalid or missing."""

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message)


class SinkError(DataError):
    """The finished document could not be persisted."""

    def __init__(self, message: str = "Failed to save the document"):
        super().__init__(message)
