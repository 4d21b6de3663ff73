"""
Date and Time utilities

This module handles broadcast timestamp parsing and the time zone used for
episode clock times. Centralizes all date parsing logic to maintain
consistency across the application.
"""
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo
import logging

logger = logging.getLogger(__name__)


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def _normalize_iso8601_string(date_str: str) -> str:
    """Normalize ISO8601 string by replacing 'Z' with '+00:00'

    Args:
        date_str: ISO8601 datetime string

    Returns:
        Normalized string with explicit timezone offset
    """
    return date_str.replace('Z', '+00:00') if date_str.endswith('Z') else date_str


def parse_iso8601_to_utc(date_str: str) -> datetime:
    """
    Parse ISO8601 date string and convert to UTC datetime

    This is the single source of truth for date parsing across the application.
    Naive timestamps are taken to be UTC.

    Args:
        date_str: ISO8601 datetime string (e.g., '2025-10-09T00:00:00Z' or '2025-10-09T00:00:00+01:00')

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        DateFormatError: If the date string format is invalid
    """
    try:
        normalized = _normalize_iso8601_string(date_str.strip())
        dt = datetime.fromisoformat(normalized)
        if dt.tzinfo is None:
            # A missing offset means UTC, not host local time
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, AttributeError) as e:
        raise DateFormatError(f"Invalid ISO8601 datetime format: '{date_str}'") from e


def resolve_local_timezone(name: str | None = None) -> tzinfo | None:
    """
    Resolve the zone used for episode wall clock times

    Args:
        name: IANA zone name, or None for the process local zone

    Returns:
        ZoneInfo instance, or None meaning the process local zone
    """
    if name:
        return ZoneInfo(name)
    return None


def to_local_time(dt: datetime, zone: tzinfo | None = None) -> datetime:
    """
    Convert an aware datetime to wall clock time

    With no zone the process local zone is used, with the UTC offset
    in effect at that instant rather than the current one.
    """
    return dt.astimezone(zone)
