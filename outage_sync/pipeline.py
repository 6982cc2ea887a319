"""Ordered outage synchronization run.

Steps run strictly in sequence and each one logs a progress event when it
completes. Any ApiError aborts the run unchanged; nothing is posted unless
every earlier step succeeded.
"""

from dataclasses import dataclass, field
from datetime import datetime

import structlog

from outage_sync.api.client import OutageApiClient
from outage_sync.api.constants import FILTER_DATE
from outage_sync.outages.models import OutageWithDeviceName
from outage_sync.outages.transform import (
    attach_device_names_to_outages,
    filter_outages_by_date_and_device,
)


logger = structlog.get_logger()

STEP_FETCH_OUTAGES = "Fetched all outages"
STEP_FETCH_SITE_INFO = "Fetched site information for the given site ID"
STEP_FILTER = "Filtered outages by start date and device IDs"
STEP_ATTACH_NAMES = "Attached device names to outages"
STEP_POST = "Outages have been successfully posted to the given site ID"


@dataclass(frozen=True)
class SyncResult:
    """Summary of a completed sync run."""

    site_id: str
    outages_fetched: int
    outages_matched: int
    dry_run: bool
    payload: list[OutageWithDeviceName] = field(default_factory=list)

    @property
    def outages_posted(self) -> int:
        """Number of outages submitted to the site (0 on a dry run)."""
        return 0 if self.dry_run else len(self.payload)


class OutageSyncPipeline:
    """Fetches, filters, enriches and posts outages for one site."""

    def __init__(
        self,
        client: OutageApiClient,
        site_id: str,
        cutoff: datetime = FILTER_DATE,
        dry_run: bool = False,
    ) -> None:
        """Initialize the pipeline.

        Args:
            client: API client for the remote endpoints.
            site_id: Site to synchronize.
            cutoff: Earliest outage start to report.
            dry_run: If True, stop before posting.
        """
        self._client = client
        self._site_id = site_id
        self._cutoff = cutoff
        self._dry_run = dry_run
        self._log = logger.bind(component="pipeline", site_id=site_id)

    def run(self) -> SyncResult:
        """Run all steps in order.

        Returns:
            SyncResult describing what was posted.

        Raises:
            ApiError: If any network step fails terminally.
        """
        outages = self._client.get_all_outages()
        self._step_complete(1, STEP_FETCH_OUTAGES, outages=len(outages))

        site_info = self._client.get_site_info(self._site_id)
        self._step_complete(2, STEP_FETCH_SITE_INFO, devices=len(site_info.devices))

        filtered = filter_outages_by_date_and_device(
            outages, site_info, cutoff=self._cutoff
        )
        self._step_complete(3, STEP_FILTER, outages=len(filtered))

        payload = attach_device_names_to_outages(filtered, site_info)
        self._step_complete(4, STEP_ATTACH_NAMES, outages=len(payload))

        if self._dry_run:
            self._log.info("sync_step_skipped", step=5, reason="dry_run")
        else:
            self._client.post_outages_to_site(payload, self._site_id)
            self._step_complete(5, STEP_POST, outages=len(payload))

        return SyncResult(
            site_id=self._site_id,
            outages_fetched=len(outages),
            outages_matched=len(filtered),
            dry_run=self._dry_run,
            payload=payload,
        )

    def _step_complete(self, step: int, message: str, **counts: int) -> None:
        self._log.info("sync_step_complete", step=step, message=message, **counts)
