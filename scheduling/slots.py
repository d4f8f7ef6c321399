"""
Slot availability for a mentor on a calendar date.

A weekly availability row becomes a bookable slot on a date when it matches
the date's day of week and overlaps neither an override for that date nor a
confirmed booking. Overlaps are tested on instants in the mentor's zone.
"""

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from config import settings
from db.json_store import JsonStore
from models.availability import DayOfWeek, WeeklyAvailabilitySlot
from models.booking import Booking, BookingStatus
from models.slot import AvailableDate, Slot
from scheduling.windows import booking_window, override_window, weekly_window
from utils.datetime_utils import (
    day_of_week_for_date,
    intervals_overlap,
    to_instant,
    upcoming_week_dates,
    utc_now,
)
from utils.constants import DAYS_IN_WEEK
from utils.exceptions import UserNotFoundError
from utils.validation import require_date_string, require_timezone

logger = logging.getLogger(__name__)


def resolve_mentor_timezone(store: JsonStore, mentor_id: str) -> str:
    """
    Timezone of a mentor's user record, or the configured default when the
    record has none.

    Raises:
        UserNotFoundError: If the mentor does not exist
    """
    mentor = store.get_user_by_id(mentor_id)
    if mentor is None:
        raise UserNotFoundError(f"Mentor not found: {mentor_id}")
    return mentor.timezone or settings.default_timezone


class SlotCalculator:
    """Computes open, bookable windows from the data store."""

    def __init__(self, store: JsonStore):
        self.store = store

    def compute_available_slots(
        self, mentor_id: str, date_str: str, mentor_timezone: str
    ) -> List[Slot]:
        """
        Open slots for a mentor on a date, ordered by start.

        Args:
            mentor_id: Mentor user ID
            date_str: Calendar date, YYYY-MM-DD
            mentor_timezone: IANA zone the weekly rows are expressed in

        Returns:
            Deduplicated slots sorted by start instant; empty when the mentor
            has no weekly rows for that weekday or the stored data cannot be
            read

        Raises:
            ParseError: If date_str or mentor_timezone is malformed
        """
        require_date_string(date_str)
        require_timezone(mentor_timezone)

        try:
            return self._compute(mentor_id, date_str, mentor_timezone)
        except Exception:
            logger.exception(
                f"Failed to compute slots for mentor {mentor_id} on {date_str}; "
                f"showing no availability"
            )
            return []

    def _compute(self, mentor_id: str, date_str: str, tz_name: str) -> List[Slot]:
        day = day_of_week_for_date(date_str)
        weekly_rows = [
            row
            for row in self.store.get_mentor_weekly_availability(mentor_id)
            if row.day_of_week == day
        ]
        if not weekly_rows:
            return []

        bookings = self._bookings_on_date(mentor_id, date_str, tz_name)
        blocked = [
            override_window(o, tz_name)
            for o in self.store.get_mentor_availability_overrides(mentor_id)
            if o.date == date_str
        ]
        booked = [booking_window(b) for b in bookings]

        slots: List[Slot] = []
        seen = set()
        for row in weekly_rows:
            start, end = weekly_window(row, date_str, tz_name)

            # Overrides block whole rows, no partial splitting
            if any(intervals_overlap(start, end, *window) for window in blocked):
                continue
            if any(intervals_overlap(start, end, *window) for window in booked):
                continue

            key = (row.slot_start, row.slot_end)
            if key in seen:
                continue
            seen.add(key)
            slots.append(
                Slot(start=start, end=end, start_time=row.slot_start, end_time=row.slot_end)
            )

        slots.sort(key=lambda s: s.start)
        logger.debug(
            f"Mentor {mentor_id} on {date_str} ({day.value}): "
            f"{len(weekly_rows)} weekly rows, {len(slots)} open"
        )
        return slots

    def _bookings_on_date(self, mentor_id: str, date_str: str, tz_name: str) -> List[Booking]:
        """Confirmed bookings touching the mentor-local calendar day."""
        next_day = (date.fromisoformat(date_str) + timedelta(days=1)).isoformat()
        day_start = to_instant(date_str, "00:00", tz_name)
        day_end = to_instant(next_day, "00:00", tz_name)

        return [
            booking
            for booking in self.store.get_bookings(
                mentor_id=mentor_id, status=BookingStatus.CONFIRMED
            )
            if intervals_overlap(*booking_window(booking), day_start, day_end)
        ]

    def available_slots_for_mentor(self, mentor_id: str, date_str: str) -> List[Slot]:
        """
        Open slots using the mentor's own timezone.

        An unknown mentor has no availability.
        """
        try:
            tz_name = resolve_mentor_timezone(self.store, mentor_id)
        except UserNotFoundError as e:
            logger.warning(f"{e}; showing no availability")
            return []
        return self.compute_available_slots(mentor_id, date_str, tz_name)

    def get_available_dates(
        self,
        mentor_id: str,
        mentor_timezone: str,
        weeks_ahead: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[AvailableDate]:
        """
        Dates in the coming weeks that have at least one open slot.

        Args:
            mentor_id: Mentor user ID
            mentor_timezone: IANA zone of the mentor
            weeks_ahead: Horizon in weeks (default from settings)
            today: First date to consider (default: today in UTC)
        """
        require_timezone(mentor_timezone)
        if weeks_ahead is None:
            weeks_ahead = settings.available_dates_weeks_ahead
        today = today or utc_now().date()

        dates = []
        for offset in range(weeks_ahead * DAYS_IN_WEEK):
            date_str = (today + timedelta(days=offset)).isoformat()
            slots = self.compute_available_slots(mentor_id, date_str, mentor_timezone)
            if slots:
                dates.append(AvailableDate(date=date_str, slots_count=len(slots)))
        return dates

    def week_availability(
        self, mentor_id: str, mentor_timezone: str, today: Optional[date] = None
    ) -> Dict[str, bool]:
        """Date picker days (next Monday to Friday) mapped to whether any slot is open."""
        return {
            day.isoformat(): bool(
                self.compute_available_slots(mentor_id, day.isoformat(), mentor_timezone)
            )
            for day in upcoming_week_dates(today)
        }

    def weekly_overview(self, mentor_id: str) -> Dict[DayOfWeek, List[WeeklyAvailabilitySlot]]:
        """
        Weekly rows grouped by day in Monday-first order.

        Rows repeating the same window on a day are listed once.
        """
        grouped: Dict[DayOfWeek, List[WeeklyAvailabilitySlot]] = {}
        seen = set()
        for row in self.store.get_mentor_weekly_availability(mentor_id):
            key = (row.day_of_week, row.slot_start, row.slot_end)
            if key in seen:
                continue
            seen.add(key)
            grouped.setdefault(DayOfWeek(row.day_of_week), []).append(row)

        return {
            day: sorted(grouped[day], key=lambda r: r.slot_start)
            for day in DayOfWeek
            if day in grouped
        }
