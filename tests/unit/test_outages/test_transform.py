"""Unit tests for outage filtering and enrichment."""

from datetime import UTC, datetime

import pytest

from outage_sync.outages.models import Device, Outage, OutageWithDeviceName, SiteInfo
from outage_sync.outages.transform import (
    attach_device_names_to_outages,
    filter_outages_by_date_and_device,
)


def _outage(device_id: str, begin: str, end: str = "2022-02-01T00:00:00Z") -> Outage:
    return Outage.model_validate({"id": device_id, "begin": begin, "end": end})


@pytest.fixture
def site_info() -> SiteInfo:
    return SiteInfo(
        id="norwich-pear-tree",
        name="Norwich Pear Tree",
        devices=[
            Device(id="device-1", name="Battery 1"),
            Device(id="device-2", name="Battery 2"),
        ],
    )


class TestFilterOutagesByDateAndDevice:
    """Tests for filter_outages_by_date_and_device."""

    def test_keeps_recent_outages_on_known_devices(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-1", "2022-01-01T00:00:00Z"),
            _outage("device-2", "2022-01-02T00:00:00Z"),
            _outage("device-1", "2021-12-31T00:00:00Z"),
        ]

        result = filter_outages_by_date_and_device(outages, site_info)

        assert result == outages[:2]

    def test_cutoff_is_inclusive(self, site_info: SiteInfo) -> None:
        outage = _outage("device-1", "2022-01-01T00:00:00.000Z")

        assert filter_outages_by_date_and_device([outage], site_info) == [outage]

    def test_drops_unknown_devices(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-3", "2022-03-01T00:00:00Z"),
            _outage("device-2", "2022-03-02T00:00:00Z"),
        ]

        result = filter_outages_by_date_and_device(outages, site_info)

        assert [o.id for o in result] == ["device-2"]

    def test_drops_outage_with_empty_id(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("", "2022-03-01T00:00:00Z"),
            _outage("device-1", "2022-03-02T00:00:00Z"),
        ]

        result = filter_outages_by_date_and_device(outages, site_info)

        assert [o.id for o in result] == ["device-1"]

    def test_preserves_input_order(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-2", "2022-05-01T00:00:00Z"),
            _outage("device-1", "2022-02-01T00:00:00Z"),
            _outage("device-2", "2022-03-01T00:00:00Z"),
        ]

        assert filter_outages_by_date_and_device(outages, site_info) == outages

    def test_offset_timestamps_compare_as_instants(self, site_info: SiteInfo) -> None:
        """23:30 on Dec 31 at -01:00 is already 2022 in UTC."""
        outage = _outage("device-1", "2021-12-31T23:30:00-01:00")

        assert filter_outages_by_date_and_device([outage], site_info) == [outage]

    def test_custom_cutoff(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-1", "2022-01-01T00:00:00Z"),
            _outage("device-1", "2022-06-01T00:00:00Z"),
        ]

        result = filter_outages_by_date_and_device(
            outages, site_info, cutoff=datetime(2022, 3, 1, tzinfo=UTC)
        )

        assert result == outages[1:]

    def test_empty_roster_filters_everything(self) -> None:
        empty_site = SiteInfo(id="empty", name="Empty", devices=[])

        outages = [_outage("device-1", "2022-02-01T00:00:00Z")]

        assert filter_outages_by_date_and_device(outages, empty_site) == []


class TestAttachDeviceNamesToOutages:
    """Tests for attach_device_names_to_outages."""

    def test_empty_input(self, site_info: SiteInfo) -> None:
        assert attach_device_names_to_outages([], site_info) == []

    def test_no_matching_devices(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-8", "2022-02-01T00:00:00Z"),
            _outage("device-9", "2022-02-02T00:00:00Z"),
        ]

        assert attach_device_names_to_outages(outages, site_info) == []

    def test_partial_match(self, site_info: SiteInfo) -> None:
        outages = [
            _outage("device-2", "2022-02-01T00:00:00Z"),
            _outage("device-9", "2022-02-02T00:00:00Z"),
            _outage("device-1", "2022-02-03T00:00:00Z"),
        ]

        result = attach_device_names_to_outages(outages, site_info)

        assert [(o.id, o.name) for o in result] == [
            ("device-2", "Battery 2"),
            ("device-1", "Battery 1"),
        ]
        assert all(isinstance(o, OutageWithDeviceName) for o in result)

    def test_keeps_outage_interval(self, site_info: SiteInfo) -> None:
        outage = _outage("device-1", "2022-02-01T00:00:00Z", "2022-02-01T04:00:00Z")

        (enriched,) = attach_device_names_to_outages([outage], site_info)

        assert enriched.begin == outage.begin
        assert enriched.end == outage.end
