"""Outage data models and transforms."""

from outage_sync.outages.models import (
    Device,
    Outage,
    OutageWithDeviceName,
    SiteInfo,
    format_timestamp,
)
from outage_sync.outages.transform import (
    attach_device_names_to_outages,
    filter_outages_by_date_and_device,
)


__all__ = [
    # Models
    "Device",
    "Outage",
    "OutageWithDeviceName",
    "SiteInfo",
    "format_timestamp",
    # Transforms
    "attach_device_names_to_outages",
    "filter_outages_by_date_and_device",
]
