"""Bounded-retry execution and status classification for API calls.

Every API operation runs through ``ResilientCallExecutor.execute``:

- 200 (any 2xx for POST) returns the response immediately
- 500 is retried after a fixed delay, up to ``max_retries`` attempts
- 403, 404 (site-scoped calls only), 429 and any other status are terminal
- a failure without a status is a terminal transport failure
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

import structlog
from pydantic import BaseModel, ConfigDict, Field

from outage_sync.api.constants import (
    HTTP_STATUS_FORBIDDEN,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_OK,
    HTTP_STATUS_SUCCESS_MAX,
    HTTP_STATUS_SUCCESS_MIN,
    HTTP_STATUS_TOO_MANY_REQUESTS,
    MAX_RETRIES,
    RETRY_DELAY_MS,
)
from outage_sync.api.errors import (
    AccessDeniedError,
    ApiError,
    RateLimitedError,
    RequestFailedError,
    RetriesExhaustedError,
    SiteNotFoundError,
    UnexpectedStatusError,
)
from outage_sync.api.metrics import ApiMetrics
from outage_sync.api.transport import (
    TransportFailure,
    TransportResponse,
    normalize_failure,
)


logger = structlog.get_logger()


class RetryPolicy(BaseModel):
    """Fixed-delay retry policy for server errors.

    ``max_retries`` is the total number of attempts, not the number of
    retries after the first one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: Annotated[int, Field(ge=1, le=10)] = MAX_RETRIES
    retry_delay_ms: Annotated[int, Field(ge=0, le=60000)] = RETRY_DELAY_MS

    @property
    def retry_delay_seconds(self) -> float:
        """Get the delay between attempts in seconds."""
        return self.retry_delay_ms / 1000.0


@dataclass(frozen=True)
class ApiCall:
    """Describes one API operation for the executor.

    Attributes:
        operation: Operation name used in logs and errors.
        exhausted_phrase: Completes "Reached max retries (N) ..." messages.
        site_id: Site the call is scoped to, if any.
        not_found_applies: Whether 404 means "site not found".
        accept_any_success: Whether any 2xx counts as success (else only 200).
    """

    operation: str
    exhausted_phrase: str
    site_id: str | None = None
    not_found_applies: bool = False
    accept_any_success: bool = False

    def is_success(self, status_code: int) -> bool:
        """Check whether a status completes the call."""
        if self.accept_any_success:
            return HTTP_STATUS_SUCCESS_MIN <= status_code < HTTP_STATUS_SUCCESS_MAX
        return status_code == HTTP_STATUS_OK

    def exhausted_message(self, max_retries: int) -> str:
        """Build the retries-exhausted message for this call."""
        return f"Reached max retries ({max_retries}) {self.exhausted_phrase}"


def fetch_outages_call() -> ApiCall:
    """Describe the GET /outages operation."""
    return ApiCall(
        operation="fetch_outages",
        exhausted_phrase="for fetching outages",
    )


def fetch_site_info_call(site_id: str) -> ApiCall:
    """Describe the GET /site-info/{site_id} operation."""
    return ApiCall(
        operation="fetch_site_info",
        exhausted_phrase=f"for fetching site info for {site_id}",
        site_id=site_id,
        not_found_applies=True,
    )


def post_site_outages_call(site_id: str) -> ApiCall:
    """Describe the POST /site-outages/{site_id} operation."""
    return ApiCall(
        operation="post_site_outages",
        exhausted_phrase=f"to post site outages for {site_id}",
        site_id=site_id,
        not_found_applies=True,
        accept_any_success=True,
    )


def is_retryable(failure: TransportFailure) -> bool:
    """Check whether a failure should be retried."""
    return failure.status_code == HTTP_STATUS_INTERNAL_SERVER_ERROR


def classify_failure(call: ApiCall, failure: TransportFailure) -> ApiError:
    """Map a non-retryable failure to its terminal error.

    Args:
        call: The operation that failed.
        failure: Normalized transport failure.

    Returns:
        The terminal ApiError for this failure.
    """
    if not failure.has_response:
        return RequestFailedError(call.operation, failure.message, call.site_id)
    status = failure.status_code
    if status == HTTP_STATUS_FORBIDDEN:
        return AccessDeniedError(call.operation, call.site_id)
    if status == HTTP_STATUS_NOT_FOUND and call.not_found_applies and call.site_id:
        return SiteNotFoundError(call.operation, call.site_id)
    if status == HTTP_STATUS_TOO_MANY_REQUESTS:
        return RateLimitedError(call.operation, call.site_id)
    return UnexpectedStatusError(call.operation, status, call.site_id)


class ResilientCallExecutor:
    """Runs API actions under the retry policy and classifies failures."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the executor.

        Args:
            policy: Retry policy (defaults to 3 attempts, 1000 ms apart).
            sleep: Function used to wait between attempts.
        """
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
        self._metrics = ApiMetrics.get_instance()
        self._log = logger.bind(component="api")

    def execute(
        self,
        call: ApiCall,
        action: Callable[[], TransportResponse],
    ) -> TransportResponse:
        """Execute an action with bounded retry on server errors.

        Args:
            call: Description of the operation.
            action: Zero-argument callable performing one HTTP exchange.

        Returns:
            The successful TransportResponse.

        Raises:
            ApiError: On any terminal failure, including retry exhaustion.
        """
        log = self._log.bind(operation=call.operation, site_id=call.site_id)
        max_retries = self._policy.max_retries

        for attempt in range(1, max_retries + 1):
            outcome = self._attempt(call, action)
            if isinstance(outcome, TransportResponse):
                self._metrics.record_success()
                log.debug(
                    "api_call_succeeded",
                    attempt=attempt,
                    status_code=outcome.status_code,
                )
                return outcome

            failure = outcome
            if not is_retryable(failure):
                error = classify_failure(call, failure)
                self._metrics.record_failure(error.error_class)
                log.warning(
                    "api_call_failed",
                    attempt=attempt,
                    status_code=failure.status_code,
                    error_class=error.error_class.value,
                    error=error.message,
                )
                raise error from failure.cause

            if attempt == max_retries:
                break

            self._metrics.record_retry()
            log.info(
                "api_retry_scheduled",
                attempt=attempt,
                max_retries=max_retries,
                delay_ms=self._policy.retry_delay_ms,
            )
            self._sleep(self._policy.retry_delay_seconds)

        error = RetriesExhaustedError(
            operation=call.operation,
            message=call.exhausted_message(max_retries),
            attempts=max_retries,
            site_id=call.site_id,
        )
        self._metrics.record_failure(error.error_class)
        log.error("api_retries_exhausted", attempts=max_retries)
        raise error

    def _attempt(
        self,
        call: ApiCall,
        action: Callable[[], TransportResponse],
    ) -> TransportResponse | TransportFailure:
        """Run a single attempt.

        Returns:
            The response on success, otherwise the normalized failure.
        """
        try:
            response = action()
        except Exception as e:  # noqa: BLE001
            failure = normalize_failure(e)
            self._metrics.record_attempt(failure.status_code)
            return failure

        self._metrics.record_attempt(response.status_code)
        if call.is_success(response.status_code):
            return response
        return TransportFailure(
            status_code=response.status_code,
            message=f"HTTP {response.status_code}",
        )
