"""HTTP transport for the outage API.

The executor only depends on the ``HttpTransport`` protocol. Failures may
surface with the status directly on the raised object or nested under a
``response`` attribute (the httpx ``HTTPStatusError`` shape);
``normalize_failure`` folds both into a single ``TransportFailure``.
"""

from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Protocol, Self

import httpx

from outage_sync.api.constants import DEFAULT_TIMEOUT_SECONDS


_STATUS_ATTRIBUTES = ("status_code", "status")


@dataclass(frozen=True)
class TransportResponse:
    """Status and decoded body of a completed HTTP exchange."""

    status_code: int
    body: Any = None


@dataclass(frozen=True)
class TransportFailure:
    """A failed HTTP exchange, normalized for classification.

    Attributes:
        status_code: HTTP status, or None if no response was received.
        message: Description of the underlying failure.
        cause: The exception raised by the transport, if any.
    """

    status_code: int | None
    message: str
    cause: BaseException | None = field(default=None, compare=False)

    @property
    def has_response(self) -> bool:
        """Check whether the server answered at all."""
        return self.status_code is not None


class HttpTransport(Protocol):
    """Minimal request/response client used by the API client."""

    def get(self, url: str, headers: dict[str, str]) -> TransportResponse:
        """Issue a GET request."""
        ...

    def post(
        self, url: str, body: Any, headers: dict[str, str]
    ) -> TransportResponse:
        """Issue a POST request with a JSON body."""
        ...


def _status_of(obj: object) -> int | None:
    for attribute in _STATUS_ATTRIBUTES:
        value = getattr(obj, attribute, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def normalize_failure(error: BaseException) -> TransportFailure:
    """Fold a raised transport error into a TransportFailure.

    Looks for a status on the error itself first, then on a nested
    ``response`` object. Anything without a recognizable status is a
    pure transport failure.

    Args:
        error: Exception raised by the transport.

    Returns:
        TransportFailure with the status, if any, and the error message.
    """
    status = _status_of(error)
    if status is None:
        response = getattr(error, "response", None)
        if response is not None:
            status = _status_of(response)
    message = str(error) or type(error).__name__
    return TransportFailure(status_code=status, message=message, cause=error)


class HttpxTransport:
    """HttpTransport backed by a shared ``httpx.Client``.

    Error statuses are raised as ``httpx.HTTPStatusError`` and network
    failures as ``httpx.RequestError``, both left for the caller to
    classify.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Request timeout in seconds.
            client: Optional preconfigured client (e.g. with a MockTransport).
        """
        self._client = client or httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=True,
        )

    def get(self, url: str, headers: dict[str, str]) -> TransportResponse:
        """Issue a GET request and decode the JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.RequestError: If no response was received.
        """
        response = self._client.get(url, headers=headers)
        response.raise_for_status()
        body = response.json() if response.content else None
        return TransportResponse(status_code=response.status_code, body=body)

    def post(
        self, url: str, body: Any, headers: dict[str, str]
    ) -> TransportResponse:
        """Issue a POST request with a JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.RequestError: If no response was received.
        """
        response = self._client.post(url, json=body, headers=headers)
        response.raise_for_status()
        return TransportResponse(status_code=response.status_code)

    def close(self) -> None:
        """Close the underlying client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
