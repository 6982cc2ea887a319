"""Error types for the outage API layer."""

from enum import Enum


class ApiErrorClass(str, Enum):
    """Classification of terminal API errors.

    - ACCESS_DENIED: 403 from the remote API
    - NOT_FOUND: 404 for a site-scoped resource
    - RATE_LIMITED: 429 Too Many Requests
    - UNEXPECTED_STATUS: Any other status the layer does not handle
    - TRANSPORT_FAILURE: No HTTP response was obtained
    - RETRIES_EXHAUSTED: Every attempt returned 500
    - INVALID_RESPONSE: Response body does not match the expected schema
    """

    ACCESS_DENIED = "ACCESS_DENIED"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    UNEXPECTED_STATUS = "UNEXPECTED_STATUS"
    TRANSPORT_FAILURE = "TRANSPORT_FAILURE"
    RETRIES_EXHAUSTED = "RETRIES_EXHAUSTED"
    INVALID_RESPONSE = "INVALID_RESPONSE"


class ApiError(Exception):
    """Base exception for terminal API errors.

    The exception message is the human-readable text shown to operators;
    the remaining attributes carry structured context for logging.
    """

    def __init__(
        self,
        error_class: ApiErrorClass,
        message: str,
        operation: str | None = None,
        site_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the API error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            operation: Name of the API operation that failed.
            site_id: Site identifier, for site-scoped operations.
            status_code: HTTP status code, if a response was received.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.operation = operation
        self.site_id = site_id
        self.status_code = status_code

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "operation": self.operation,
            "site_id": self.site_id,
            "status_code": self.status_code,
        }


class AccessDeniedError(ApiError):
    """The API key was rejected (403)."""

    def __init__(self, operation: str, site_id: str | None = None) -> None:
        super().__init__(
            error_class=ApiErrorClass.ACCESS_DENIED,
            message="Access denied",
            operation=operation,
            site_id=site_id,
            status_code=403,
        )


class SiteNotFoundError(ApiError):
    """The requested site does not exist (404)."""

    def __init__(self, operation: str, site_id: str) -> None:
        super().__init__(
            error_class=ApiErrorClass.NOT_FOUND,
            message=f"Site with ID {site_id} not found",
            operation=operation,
            site_id=site_id,
            status_code=404,
        )


class RateLimitedError(ApiError):
    """The API rejected the request as rate limited (429)."""

    def __init__(self, operation: str, site_id: str | None = None) -> None:
        super().__init__(
            error_class=ApiErrorClass.RATE_LIMITED,
            message="Too many requests",
            operation=operation,
            site_id=site_id,
            status_code=429,
        )


class UnexpectedStatusError(ApiError):
    """The API answered with a status code the layer does not handle."""

    def __init__(
        self, operation: str, status_code: int, site_id: str | None = None
    ) -> None:
        super().__init__(
            error_class=ApiErrorClass.UNEXPECTED_STATUS,
            message=f"Unexpected response status code: {status_code}",
            operation=operation,
            site_id=site_id,
            status_code=status_code,
        )


class RequestFailedError(ApiError):
    """No HTTP response was received (connection, DNS or timeout failure)."""

    def __init__(
        self, operation: str, reason: str, site_id: str | None = None
    ) -> None:
        super().__init__(
            error_class=ApiErrorClass.TRANSPORT_FAILURE,
            message=f"Request failed: {reason}",
            operation=operation,
            site_id=site_id,
        )
        self.reason = reason


class RetriesExhaustedError(ApiError):
    """Every attempt returned a retryable server error.

    Attributes:
        attempts: Number of attempts made before giving up.
    """

    def __init__(
        self,
        operation: str,
        message: str,
        attempts: int,
        site_id: str | None = None,
    ) -> None:
        super().__init__(
            error_class=ApiErrorClass.RETRIES_EXHAUSTED,
            message=message,
            operation=operation,
            site_id=site_id,
            status_code=500,
        )
        self.attempts = attempts


class InvalidResponseError(ApiError):
    """A successful response carried a body that failed validation."""

    def __init__(
        self, operation: str, detail: str, site_id: str | None = None
    ) -> None:
        super().__init__(
            error_class=ApiErrorClass.INVALID_RESPONSE,
            message=f"Invalid response payload for {operation}: {detail}",
            operation=operation,
            site_id=site_id,
            status_code=200,
        )
