"""
Input validation utilities for dates, times and timezones.
"""

import re
from datetime import date

import pytz

from utils.exceptions import ParseError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_date_string(date_str: str) -> bool:
    """
    Validate a calendar date string.

    Args:
        date_str: Date in "YYYY-MM-DD" format

    Returns:
        True if valid, False otherwise
    """
    if not date_str or not isinstance(date_str, str):
        return False

    if not _DATE_PATTERN.match(date_str):
        return False

    # Reject impossible dates such as 2025-02-30
    try:
        date.fromisoformat(date_str)
    except ValueError:
        return False
    return True


def validate_time_string(time_str: str) -> bool:
    """
    Validate a 24-hour wall-clock time.

    Args:
        time_str: Time in "HH:MM" format

    Returns:
        True if valid, False otherwise
    """
    if not time_str or not isinstance(time_str, str):
        return False
    return bool(_TIME_PATTERN.match(time_str))


def validate_timezone(timezone: str) -> bool:
    """
    Validate an IANA timezone name.

    Args:
        timezone: Zone name such as "America/New_York"

    Returns:
        True if pytz knows the zone, False otherwise
    """
    if not timezone or not isinstance(timezone, str):
        return False
    return timezone in pytz.all_timezones_set


def require_date_string(date_str: str) -> str:
    """Return date_str unchanged or raise ParseError."""
    if not validate_date_string(date_str):
        raise ParseError(f"Invalid date (expected YYYY-MM-DD): {date_str!r}")
    return date_str


def require_time_string(time_str: str) -> str:
    """Return time_str unchanged or raise ParseError."""
    if not validate_time_string(time_str):
        raise ParseError(f"Invalid time (expected HH:MM): {time_str!r}")
    return time_str


def require_timezone(timezone: str) -> str:
    """Return timezone unchanged or raise ParseError."""
    if not validate_timezone(timezone):
        raise ParseError(f"Unknown timezone: {timezone!r}")
    return timezone


def require_time_range(start_time: str, end_time: str) -> None:
    """
    Check an HH:MM-HH:MM window on a single day.

    Raises:
        ParseError: If either time is malformed or the window is empty or reversed
    """
    require_time_string(start_time)
    require_time_string(end_time)
    # Zero-padded HH:MM strings order the same way as the times they name
    if start_time >= end_time:
        raise ParseError(f"Slot must end after it starts: {start_time}-{end_time}")
