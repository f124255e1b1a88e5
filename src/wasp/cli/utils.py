"""Shared utility functions for CLI commands."""

from datetime import datetime


def format_timestamp(ts: datetime) -> str:
    """Format an aware datetime as readable local time."""
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")
