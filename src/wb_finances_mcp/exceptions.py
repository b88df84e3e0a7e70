"""Common exceptions for the wb-finances-mcp package."""

from typing import Optional


class WBAPIError(Exception):
    """Raised when the Wildberries API call fails."""

    error_code = "api_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []


class ValidationError(WBAPIError):
    """Raised when input or an upstream response fails validation."""

    error_code = "invalid_input"


class AuthError(WBAPIError):
    """Raised on 401: the API key is invalid or missing."""

    error_code = "auth_failed"

    def __init__(self, message: str = "User is not authorized. Check the API key.") -> None:
        super().__init__(message, status_code=401)


class RateLimitError(WBAPIError):
    """Raised on 429. Nothing is retried; the caller must wait."""

    error_code = "rate_limit_exceeded"

    def __init__(self, message: str, retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class BadRequestError(WBAPIError):
    """Raised on 400, carrying the upstream error text."""

    error_code = "bad_request"

    def __init__(self, message: str, details: Optional[list[str]] = None) -> None:
        super().__init__(message, status_code=400, details=details)


class HttpError(WBAPIError):
    """Raised for any other non-2xx response."""

    error_code = "api_error"

    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(f"HTTP error {status_code}: {message}", status_code=status_code)
