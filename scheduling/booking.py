"""
Booking orchestration with an atomic check-then-create per mentor.

The conflict check and the booking insert run under the same per-mentor lock,
so two overlapping requests for one mentor cannot both succeed. Slot listings
do not take the lock; they are advisory and re-validated here.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from db.json_store import JsonStore
from models.booking import Booking, BookingCreate, BookingStatus
from models.slot import BookingOutcome
from scheduling.conflicts import ConflictChecker
from scheduling.slots import resolve_mentor_timezone
from scheduling.windows import local_window
from utils.exceptions import BookingNotFoundError, WriteRaceError

logger = logging.getLogger(__name__)


class MentorLocks:
    """Registry of one lock per mentor id, created on first use."""

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def for_mentor(self, mentor_id: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(mentor_id, threading.Lock())

    @contextmanager
    def hold(self, mentor_id: str) -> Iterator[None]:
        with self.for_mentor(mentor_id):
            yield


class BookingService:
    """Creates bookings only for slots that are free at write time."""

    def __init__(
        self,
        store: JsonStore,
        checker: Optional[ConflictChecker] = None,
        locks: Optional[MentorLocks] = None,
    ):
        self.store = store
        self.checker = checker or ConflictChecker(store)
        self.locks = locks or MentorLocks()

    def book_slot(
        self,
        mentor_id: str,
        mentee_id: str,
        date_str: str,
        start_time: str,
        end_time: str,
        mentor_timezone: str,
        notes: Optional[str] = None,
    ) -> Booking:
        """
        Book a slot the caller believes to be free.

        Args:
            mentor_id: Mentor user ID
            mentee_id: Mentee user ID
            date_str: Calendar date, YYYY-MM-DD
            start_time: Local start, HH:MM
            end_time: Local end, HH:MM
            mentor_timezone: IANA zone of the mentor
            notes: Optional note stored on the booking

        Returns:
            The confirmed booking

        Raises:
            WriteRaceError: If the slot is no longer free; carries the
                fresh ConflictResult
            ParseError: If the date, times or timezone are malformed
        """
        with self.locks.hold(mentor_id):
            conflict = self.checker.check_conflict(
                mentor_id, date_str, start_time, end_time, mentor_timezone
            )
            if conflict.has_conflict:
                logger.warning(
                    f"Slot {date_str} {start_time}-{end_time} for mentor {mentor_id} "
                    f"taken before write: {conflict.reason}"
                )
                raise WriteRaceError(
                    f"Slot {date_str} {start_time}-{end_time} is no longer available",
                    conflict=conflict,
                )

            start, end = local_window(date_str, start_time, end_time, mentor_timezone)
            self.store.update_draft_booking(
                mentor_id=mentor_id,
                mentee_id=mentee_id,
                selected_date=date_str,
                slot_start=start_time,
                slot_end=end_time,
            )
            return self.store.create_booking(
                BookingCreate(
                    mentor_id=mentor_id,
                    mentee_id=mentee_id,
                    start_datetime=start,
                    end_datetime=end,
                    notes=notes,
                )
            )

    def request_booking(
        self,
        mentor_id: str,
        mentee_id: str,
        date_str: str,
        start_time: str,
        end_time: str,
        mentor_timezone: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> BookingOutcome:
        """
        Confirm flow: check the slot, then book it.

        A conflict, found either by the first check or at write time, is
        returned in the outcome so the caller can offer a reschedule.

        Raises:
            UserNotFoundError: If mentor_timezone is omitted and the mentor
                does not exist
            ParseError: If the date, times or timezone are malformed, or the
                slot ends at or before its start
        """
        if mentor_timezone is None:
            mentor_timezone = resolve_mentor_timezone(self.store, mentor_id)

        conflict = self.checker.check_conflict(
            mentor_id, date_str, start_time, end_time, mentor_timezone
        )
        if conflict.has_conflict:
            return BookingOutcome(conflict=conflict)

        try:
            booking = self.book_slot(
                mentor_id, mentee_id, date_str, start_time, end_time, mentor_timezone, notes
            )
        except WriteRaceError as e:
            return BookingOutcome(conflict=e.conflict)
        return BookingOutcome(booking=booking)

    def cancel_booking(self, booking_id: str) -> Booking:
        """
        Cancel a single booking.

        Raises:
            BookingNotFoundError: If no booking has this ID
        """
        booking = self.store.get_booking_by_id(booking_id)
        if booking is None:
            raise BookingNotFoundError(f"Booking not found: {booking_id}")

        with self.locks.hold(booking.mentor_id):
            cancelled = self.store.update_booking_status(booking_id, BookingStatus.CANCELLED)
        logger.info(f"Cancelled booking {booking_id}")
        return cancelled
