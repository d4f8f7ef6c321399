"""Instant intervals of stored records, for overlap checks."""

from datetime import datetime
from typing import Tuple

from models.availability import AvailabilityOverride, WeeklyAvailabilitySlot
from models.booking import Booking
from utils.datetime_utils import parse_instant, to_instant
from utils.validation import require_time_range

Window = Tuple[datetime, datetime]


def local_window(date_str: str, start_time: str, end_time: str, tz_name: str) -> Window:
    """
    Instants of an HH:MM-HH:MM window on date_str in the mentor's zone.

    Raises:
        ParseError: If the input is malformed or the window ends at or before its start
    """
    require_time_range(start_time, end_time)
    return to_instant(date_str, start_time, tz_name), to_instant(date_str, end_time, tz_name)


def weekly_window(row: WeeklyAvailabilitySlot, date_str: str, tz_name: str) -> Window:
    return local_window(date_str, row.slot_start, row.slot_end, tz_name)


def override_window(override: AvailabilityOverride, tz_name: str) -> Window:
    return local_window(override.date, override.slot_start, override.slot_end, tz_name)


def booking_window(booking: Booking) -> Window:
    return parse_instant(booking.start_datetime), parse_instant(booking.end_datetime)
