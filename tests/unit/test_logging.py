"""Unit tests for structured logging configuration."""

import io
import json
from collections.abc import Iterator

import pytest
import structlog

from outage_sync.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    clear_run_context()
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_lines_include_run_context(self) -> None:
        output = io.StringIO()
        configure_logging(output=output)
        bind_run_context("run-123", site_id="norwich-pear-tree")

        get_logger().info("sync_started", dry_run=True)

        record = json.loads(output.getvalue().strip())
        assert record["event"] == "sync_started"
        assert record["run_id"] == "run-123"
        assert record["site_id"] == "norwich-pear-tree"
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_filters_below_level(self) -> None:
        output = io.StringIO()
        configure_logging(level=30, output=output)

        get_logger().info("hidden")

        assert output.getvalue() == ""

    def test_clear_run_context(self) -> None:
        output = io.StringIO()
        configure_logging(output=output)
        bind_run_context("run-123")
        clear_run_context()

        get_logger().info("after_clear")

        assert "run_id" not in json.loads(output.getvalue().strip())
