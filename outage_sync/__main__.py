"""Allow ``python -m outage_sync``."""

from outage_sync.cli.sync import cli


if __name__ == "__main__":
    cli()
