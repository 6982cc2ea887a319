"""Command-line interface."""

from outage_sync.cli.sync import cli


__all__ = ["cli"]
