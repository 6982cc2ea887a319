"""Outage synchronization between a monitoring API and site endpoints."""

__version__ = "0.1.0"
