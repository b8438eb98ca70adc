"""Utilities for parsing and formatting Unsplash API timestamps.

Parsing is best-effort and does not raise; callers should expect `None`
when a timestamp is missing or unreadable.
"""

from __future__ import annotations

from datetime import datetime, timezone

from loguru import logger


def parse_api_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp such as `2020-04-17T10:04:11Z`."""
    if not value:
        return None
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(text)
    except (ValueError, TypeError):
        logger.warning("Invalid API datetime: {}", value)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_api_timestamp(value: str | None) -> int | None:
    """Return the Unix timestamp for an API datetime string, or None."""
    dt = parse_api_datetime(value)
    if dt is None:
        return None
    return int(dt.timestamp())
