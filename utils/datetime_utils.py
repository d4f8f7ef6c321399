"""
Datetime utilities for consistent timezone handling across the application.

All overlap comparisons use timezone-aware instants. Local "HH:MM" strings are
only an input/display form and are always bound to the mentor's IANA zone.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

import pytz

from models.availability import DayOfWeek
from utils.constants import DAYS_IN_WEEK, SUNDAY_FIRST_DAY_NUMBERS, WORKWEEK_DAYS
from utils.exceptions import ParseError
from utils.validation import require_date_string, require_time_string


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def get_timezone(tz_name: str) -> pytz.BaseTzInfo:
    """
    Look up an IANA timezone.

    Raises:
        ParseError: If the zone is unknown
    """
    try:
        return pytz.timezone(tz_name)
    except (pytz.UnknownTimeZoneError, AttributeError) as e:
        raise ParseError(f"Unknown timezone: {tz_name!r}") from e


def to_instant(date_str: str, time_str: str, tz_name: str) -> datetime:
    """
    Compose a calendar date and a local wall-clock time into a UTC instant.

    The zone's offset for that specific date is applied, so DST is honoured.
    Wall-clock times that do not exist or are ambiguous on a DST transition
    day resolve to the standard-time offset.

    Args:
        date_str: Date in "YYYY-MM-DD" format
        time_str: Time in "HH:MM" 24-hour format
        tz_name: IANA timezone name

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ParseError: If any input is malformed
    """
    require_date_string(date_str)
    require_time_string(time_str)
    tz = get_timezone(tz_name)

    hours, minutes = (int(part) for part in time_str.split(":"))
    local = datetime.combine(date.fromisoformat(date_str), time(hours, minutes))
    return tz.localize(local, is_dst=False).astimezone(pytz.UTC)


def parse_instant(iso_string: str) -> datetime:
    """
    Parse ISO format datetime string to timezone-aware datetime.
    Handles both 'Z' suffix and '+00:00' timezone formats.

    Args:
        iso_string: ISO format datetime string

    Returns:
        Timezone-aware datetime object (naive input is taken as UTC)

    Raises:
        ParseError: If datetime string cannot be parsed
    """
    if isinstance(iso_string, datetime):
        dt = iso_string
    else:
        if not isinstance(iso_string, str) or not iso_string:
            raise ParseError(f"Invalid datetime string: {iso_string!r}")

        # Normalize 'Z' suffix to '+00:00'
        normalized = iso_string.strip()
        if normalized.endswith(("Z", "z")):
            normalized = normalized[:-1] + "+00:00"

        try:
            dt = datetime.fromisoformat(normalized)
        except ValueError as e:
            raise ParseError(f"Invalid datetime string: {iso_string!r}") from e

    # Ensure timezone-aware
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso_string(dt: datetime) -> str:
    """
    Convert datetime to ISO format string.
    Ensures timezone-aware datetimes are properly formatted.

    Args:
        dt: Datetime object (timezone-aware or naive)

    Returns:
        ISO format string
    """
    # Ensure timezone-aware
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.isoformat()


def intervals_overlap(
    start1: datetime, end1: datetime, start2: datetime, end2: datetime
) -> bool:
    """
    Check whether two instant intervals overlap.

    Boundaries are inclusive: an interval ending exactly when the other
    begins counts as overlapping.
    """
    return start1 <= end2 and end1 >= start2


def day_of_week(instant: datetime) -> DayOfWeek:
    """Day name of the instant's calendar day as observed in UTC."""
    utc_day = parse_instant(instant).astimezone(timezone.utc).date()
    return DayOfWeek.from_weekday(utc_day.weekday())


def day_of_week_for_date(date_str: str) -> DayOfWeek:
    """
    Day name of a calendar date string.

    Independent of any timezone; weekly availability rows are keyed by this.
    """
    require_date_string(date_str)
    return DayOfWeek.from_weekday(date.fromisoformat(date_str).weekday())


def day_of_week_to_number(day_name: str) -> int:
    """Map a day name to 0 (Sunday) .. 6 (Saturday), or -1 if unknown."""
    if not isinstance(day_name, str):
        return -1
    return SUNDAY_FIRST_DAY_NUMBERS.get(day_name.upper(), -1)


def convert_to_timezone(instant: datetime, tz_name: str) -> datetime:
    """Express an instant in the given IANA zone."""
    return parse_instant(instant).astimezone(get_timezone(tz_name))


def format_in_timezone(instant: datetime, fmt: str, tz_name: str) -> str:
    """Format an instant as wall-clock time in the given zone."""
    return convert_to_timezone(instant, tz_name).strftime(fmt)


def format_time_12h(time_str: str) -> str:
    """
    Format a 24-hour "HH:MM" string for display.

    Example:
        "14:00" -> "02:00 PM", "00:30" -> "12:30 AM"
    """
    require_time_string(time_str)
    hours, minutes = time_str.split(":")
    hour = int(hours)
    suffix = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12:02d}:{minutes} {suffix}"


def timezone_abbreviation(tz_name: str, date_str: Optional[str] = None) -> str:
    """
    Short zone name (EST, EDT, IST, ...) in effect at noon on the given date.

    Defaults to today's date in UTC.
    """
    tz = get_timezone(tz_name)
    day = date.fromisoformat(require_date_string(date_str)) if date_str else utc_now().date()
    return tz.localize(datetime.combine(day, time(12, 0))).tzname()


def upcoming_week_dates(today: Optional[date] = None) -> List[date]:
    """
    Weekdays offered by the booking date picker.

    Five consecutive days starting at today if today is a Monday, otherwise
    at the next Monday.
    """
    today = today or utc_now().date()
    days_to_monday = (DAYS_IN_WEEK - today.weekday()) % DAYS_IN_WEEK
    monday = today + timedelta(days=days_to_monday)
    return [monday + timedelta(days=i) for i in range(WORKWEEK_DAYS)]
