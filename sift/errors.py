from datetime import datetime


class SiftError(Exception):
    pass


class SearchError(SiftError):
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class AuthError(SearchError):
    pass


class RateLimitError(SearchError):
    def __init__(
        self,
        message: str,
        reset_at: datetime | None = None,
        remaining: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.reset_at = reset_at
        self.remaining = remaining


class NetworkError(SearchError):
    pass


class ValidationError(SearchError):
    pass
