"""Filtering and enrichment of outages against a site roster."""

from collections.abc import Sequence
from datetime import datetime

from outage_sync.api.constants import FILTER_DATE
from outage_sync.outages.models import Outage, OutageWithDeviceName, SiteInfo


def filter_outages_by_date_and_device(
    outages: Sequence[Outage],
    site_info: SiteInfo,
    cutoff: datetime = FILTER_DATE,
) -> list[Outage]:
    """Keep outages that began at or after the cutoff on a known device.

    Args:
        outages: Outages as returned by the API.
        site_info: Site whose devices are relevant.
        cutoff: Earliest accepted outage start.

    Returns:
        Matching outages in their original order.
    """
    device_ids = site_info.device_ids
    return [
        outage
        for outage in outages
        if outage.begin >= cutoff and outage.id in device_ids
    ]


def attach_device_names_to_outages(
    outages: Sequence[Outage],
    site_info: SiteInfo,
) -> list[OutageWithDeviceName]:
    """Attach device display names, dropping outages with no known device."""
    enriched: list[OutageWithDeviceName] = []
    for outage in outages:
        device = site_info.find_device(outage.id)
        if device is not None:
            enriched.append(OutageWithDeviceName.from_outage(outage, device))
    return enriched
