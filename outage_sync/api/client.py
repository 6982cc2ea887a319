"""Client for the outage monitoring API."""

from collections.abc import Sequence
from typing import Annotated, Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from outage_sync.api.constants import (
    API_BASE_URL,
    API_KEY,
    API_KEY_HEADER,
    DEFAULT_TIMEOUT_SECONDS,
    OUTAGES_PATH,
    SITE_INFO_PATH,
    SITE_OUTAGES_PATH,
)
from outage_sync.api.errors import InvalidResponseError
from outage_sync.api.executor import (
    ApiCall,
    ResilientCallExecutor,
    RetryPolicy,
    fetch_outages_call,
    fetch_site_info_call,
    post_site_outages_call,
)
from outage_sync.api.redact import redact_headers
from outage_sync.api.transport import HttpTransport
from outage_sync.outages.models import Outage, OutageWithDeviceName, SiteInfo


logger = structlog.get_logger()

_OUTAGE_LIST = TypeAdapter(list[Outage])
_SITE_INFO = TypeAdapter(SiteInfo)


class ApiConfig(BaseModel):
    """Connection settings for the outage API."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = API_BASE_URL
    api_key: Annotated[str, Field(min_length=1)] = API_KEY
    timeout_seconds: Annotated[float, Field(gt=0.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    retry_policy: RetryPolicy = Field(default_factory=RetryPolicy)

    def url_for(self, path: str) -> str:
        """Join a resource path onto the base URL."""
        return f"{self.base_url.rstrip('/')}{path}"


class OutageApiClient:
    """Fetches outages and site rosters and posts enriched outages.

    Each operation is a single HTTP exchange wrapped by the
    ResilientCallExecutor, so all three share one retry and error
    classification policy.
    """

    def __init__(
        self,
        transport: HttpTransport,
        config: ApiConfig | None = None,
        executor: ResilientCallExecutor | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: HTTP transport used for requests.
            config: API connection settings.
            executor: Retry executor; built from config.retry_policy if omitted.
        """
        self._transport = transport
        self._config = config or ApiConfig()
        self._executor = executor or ResilientCallExecutor(self._config.retry_policy)
        self._log = logger.bind(component="api_client")

    def _headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self._config.api_key}

    def get_all_outages(self) -> list[Outage]:
        """Fetch every outage known to the monitoring API.

        Returns:
            List of outages.

        Raises:
            ApiError: If the request fails terminally.
        """
        call = fetch_outages_call()
        url = self._config.url_for(OUTAGES_PATH)
        headers = self._headers()
        self._log.debug(
            "api_request", method="GET", url=url, headers=redact_headers(headers)
        )

        response = self._executor.execute(
            call, lambda: self._transport.get(url, headers)
        )
        return self._parse(call, _OUTAGE_LIST, response.body)

    def get_site_info(self, site_id: str) -> SiteInfo:
        """Fetch a site's device roster.

        Args:
            site_id: Site identifier.

        Returns:
            SiteInfo for the site.

        Raises:
            ApiError: If the request fails terminally.
        """
        call = fetch_site_info_call(site_id)
        url = self._config.url_for(SITE_INFO_PATH.format(site_id=site_id))
        headers = self._headers()
        self._log.debug(
            "api_request", method="GET", url=url, headers=redact_headers(headers)
        )

        response = self._executor.execute(
            call, lambda: self._transport.get(url, headers)
        )
        return self._parse(call, _SITE_INFO, response.body)

    def post_outages_to_site(
        self,
        outages: Sequence[OutageWithDeviceName],
        site_id: str,
    ) -> None:
        """Submit enriched outages for a site.

        The body is serialized once and the same payload is re-sent on
        every retry.

        Args:
            outages: Outages with device names.
            site_id: Site identifier.

        Raises:
            ApiError: If the request fails terminally.
        """
        call = post_site_outages_call(site_id)
        url = self._config.url_for(SITE_OUTAGES_PATH.format(site_id=site_id))
        headers = self._headers()
        body = [outage.model_dump(mode="json") for outage in outages]
        self._log.debug(
            "api_request",
            method="POST",
            url=url,
            headers=redact_headers(headers),
            outages=len(body),
        )

        self._executor.execute(
            call, lambda: self._transport.post(url, body, headers)
        )

    def _parse(self, call: ApiCall, adapter: TypeAdapter[Any], body: Any) -> Any:
        try:
            return adapter.validate_python(body)
        except ValidationError as e:
            self._log.warning(
                "api_response_invalid",
                operation=call.operation,
                errors=e.error_count(),
            )
            detail = f"{e.error_count()} validation error(s)"
            raise InvalidResponseError(call.operation, detail, call.site_id) from e
