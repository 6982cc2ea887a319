"""CLI commands for outage synchronization."""

import logging
import sys
import uuid

import click
import structlog
from pydantic import ValidationError

from outage_sync import __version__
from outage_sync.api.client import OutageApiClient
from outage_sync.api.errors import ApiError
from outage_sync.api.metrics import ApiMetrics
from outage_sync.api.transport import HttpxTransport
from outage_sync.observability.logging import bind_run_context, configure_logging
from outage_sync.pipeline import OutageSyncPipeline
from outage_sync.settings import get_settings


logger = structlog.get_logger()


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Outage synchronization CLI."""


@cli.command()
@click.option(
    "--site-id",
    default=None,
    help="Site to synchronize (default: OUTAGE_SITE_ID or norwich-pear-tree).",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Fetch, filter and enrich outages without posting them.",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Emit JSON log lines (default) or human-readable console logs.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
def run(site_id: str | None, dry_run: bool, json_logs: bool, verbose: bool) -> None:
    """Fetch outages, enrich them for a site and post them back.

    Invalid configuration or any terminal API error is logged and the
    command exits with status 1.
    """
    run_id = uuid.uuid4().hex[:12]
    configure_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        json_format=json_logs,
    )
    log = logger.bind(component="cli", command="run", dry_run=dry_run)

    try:
        settings = get_settings()
        config = settings.api_config()
    except ValidationError as e:
        log.warning("config_load_failed", error=str(e))
        click.echo("Configuration validation failed:", err=True)
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            click.echo(f"  {location}: {error['msg']}", err=True)
        sys.exit(1)

    site_id = site_id or settings.site_id
    bind_run_context(run_id, site_id=site_id)
    log.info("sync_started")

    with HttpxTransport(timeout_seconds=config.timeout_seconds) as transport:
        client = OutageApiClient(transport, config=config)
        pipeline = OutageSyncPipeline(client, site_id, dry_run=dry_run)
        try:
            result = pipeline.run()
        except ApiError as e:
            log.error("sync_failed", **e.to_dict())
            log.info("api_metrics", **ApiMetrics.get_instance().to_dict())
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    log.info(
        "sync_complete",
        outages_fetched=result.outages_fetched,
        outages_matched=result.outages_matched,
        outages_posted=result.outages_posted,
    )
    log.info("api_metrics", **ApiMetrics.get_instance().to_dict())

    if dry_run:
        click.echo(
            f"Dry run: {len(result.payload)} outages would be posted to {site_id}."
        )
    else:
        click.echo(f"Posted {result.outages_posted} outages to {site_id}.")
