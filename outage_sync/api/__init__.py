"""Resilient client for the outage monitoring API.

This module provides:
- The three API operations (fetch outages, fetch site info, post outages)
- A bounded-retry executor with status-code classification
- A typed error taxonomy for terminal failures
- An httpx-backed transport and header redaction for logging
"""

from outage_sync.api.client import ApiConfig, OutageApiClient
from outage_sync.api.errors import (
    AccessDeniedError,
    ApiError,
    ApiErrorClass,
    InvalidResponseError,
    RateLimitedError,
    RequestFailedError,
    RetriesExhaustedError,
    SiteNotFoundError,
    UnexpectedStatusError,
)
from outage_sync.api.executor import (
    ApiCall,
    ResilientCallExecutor,
    RetryPolicy,
    classify_failure,
)
from outage_sync.api.metrics import ApiMetrics
from outage_sync.api.transport import (
    HttpTransport,
    HttpxTransport,
    TransportFailure,
    TransportResponse,
    normalize_failure,
)


__all__ = [
    # Client
    "ApiConfig",
    "OutageApiClient",
    # Executor
    "ApiCall",
    "ResilientCallExecutor",
    "RetryPolicy",
    "classify_failure",
    # Errors
    "AccessDeniedError",
    "ApiError",
    "ApiErrorClass",
    "InvalidResponseError",
    "RateLimitedError",
    "RequestFailedError",
    "RetriesExhaustedError",
    "SiteNotFoundError",
    "UnexpectedStatusError",
    # Transport
    "HttpTransport",
    "HttpxTransport",
    "TransportFailure",
    "TransportResponse",
    "normalize_failure",
    # Metrics
    "ApiMetrics",
]
