"""Constants for the outage API layer.

Centralizes the remote API surface and retry defaults so the client,
executor and CLI agree on a single set of values.
"""

from datetime import UTC, datetime


# Remote API surface
API_BASE_URL = "https://api.krakenflex.systems/interview-tests-mock-api/v1"
API_KEY = "EltgJ5G8m44IzwE6UN2Y4B4NjPW77Zk6FJK3lL23"  # noqa: S105
API_KEY_HEADER = "x-api-key"
DEFAULT_SITE_ID = "norwich-pear-tree"

OUTAGES_PATH = "/outages"
SITE_INFO_PATH = "/site-info/{site_id}"
SITE_OUTAGES_PATH = "/site-outages/{site_id}"

# Retry policy
MAX_RETRIES = 3
RETRY_DELAY_MS = 1000

DEFAULT_TIMEOUT_SECONDS = 30.0

# Outages that began before this instant are not reported
FILTER_DATE = datetime(2022, 1, 1, 0, 0, 0, tzinfo=UTC)

# HTTP status codes
HTTP_STATUS_OK = 200
HTTP_STATUS_SUCCESS_MIN = 200
HTTP_STATUS_SUCCESS_MAX = 300
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500
