"""Unit tests for the sync pipeline."""

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from outage_sync.api.client import OutageApiClient
from outage_sync.api.errors import AccessDeniedError, SiteNotFoundError
from outage_sync.outages.models import Outage, SiteInfo
from outage_sync.pipeline import (
    STEP_ATTACH_NAMES,
    STEP_FETCH_OUTAGES,
    STEP_FETCH_SITE_INFO,
    STEP_FILTER,
    STEP_POST,
    OutageSyncPipeline,
)
from tests.helpers.payloads import (
    EXPECTED_POSTED_PAYLOAD,
    OUTAGES_PAYLOAD,
    SITE_ID,
    SITE_INFO_PAYLOAD,
)


@pytest.fixture
def client() -> MagicMock:
    """Create a client double returning the sample payloads."""
    mock = MagicMock(spec=OutageApiClient)
    mock.get_all_outages.return_value = [
        Outage.model_validate(item) for item in OUTAGES_PAYLOAD
    ]
    mock.get_site_info.return_value = SiteInfo.model_validate(SITE_INFO_PAYLOAD)
    return mock


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, object]]]:
    with capture_logs() as logs:
        yield logs


class TestOutageSyncPipeline:
    """Tests for OutageSyncPipeline.run."""

    def test_posts_filtered_and_enriched_outages(self, client: MagicMock) -> None:
        result = OutageSyncPipeline(client, SITE_ID).run()

        client.get_site_info.assert_called_once_with(SITE_ID)
        posted, site_id = client.post_outages_to_site.call_args.args
        assert site_id == SITE_ID
        assert [o.model_dump(mode="json") for o in posted] == EXPECTED_POSTED_PAYLOAD
        assert result.outages_fetched == 3
        assert result.outages_matched == 2
        assert result.outages_posted == 2

    def test_logs_each_step_in_order(
        self, client: MagicMock, captured_logs: list[dict[str, object]]
    ) -> None:
        OutageSyncPipeline(client, SITE_ID).run()

        steps = [
            (log["step"], log["message"])
            for log in captured_logs
            if log["event"] == "sync_step_complete"
        ]
        assert steps == [
            (1, STEP_FETCH_OUTAGES),
            (2, STEP_FETCH_SITE_INFO),
            (3, STEP_FILTER),
            (4, STEP_ATTACH_NAMES),
            (5, STEP_POST),
        ]

    def test_dry_run_skips_post(
        self, client: MagicMock, captured_logs: list[dict[str, object]]
    ) -> None:
        result = OutageSyncPipeline(client, SITE_ID, dry_run=True).run()

        client.post_outages_to_site.assert_not_called()
        assert result.dry_run is True
        assert result.outages_posted == 0
        assert len(result.payload) == 2
        assert any(log["event"] == "sync_step_skipped" for log in captured_logs)

    def test_fetch_error_stops_the_run(self, client: MagicMock) -> None:
        client.get_all_outages.side_effect = AccessDeniedError("fetch_outages")

        with pytest.raises(AccessDeniedError):
            OutageSyncPipeline(client, SITE_ID).run()

        client.get_site_info.assert_not_called()
        client.post_outages_to_site.assert_not_called()

    def test_site_error_stops_before_post(self, client: MagicMock) -> None:
        client.get_site_info.side_effect = SiteNotFoundError(
            "fetch_site_info", SITE_ID
        )

        with pytest.raises(SiteNotFoundError, match="not found"):
            OutageSyncPipeline(client, SITE_ID).run()

        client.post_outages_to_site.assert_not_called()
