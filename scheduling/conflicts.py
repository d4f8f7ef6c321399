"""Conflict detection for a candidate booking slot."""

import logging

from db.json_store import JsonStore
from models.booking import BookingStatus
from models.slot import ConflictReason, ConflictResult
from scheduling.windows import booking_window, local_window, override_window
from utils.datetime_utils import intervals_overlap

logger = logging.getLogger(__name__)


class ConflictChecker:
    """
    Authoritative check of one candidate slot against the current data.

    Earlier slot listings are never trusted: the data may have changed since
    they were computed.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def check_conflict(
        self,
        mentor_id: str,
        date_str: str,
        slot_start: str,
        slot_end: str,
        mentor_timezone: str,
    ) -> ConflictResult:
        """
        Check whether booking slot_start-slot_end on date_str would conflict.

        Confirmed bookings are checked first across all dates, then the
        overrides for date_str. The first overlapping record wins.

        Raises:
            ParseError: If the date, times or timezone are malformed
        """
        start, end = local_window(date_str, slot_start, slot_end, mentor_timezone)

        for booking in self.store.get_bookings(mentor_id=mentor_id, status=BookingStatus.CONFIRMED):
            if intervals_overlap(start, end, *booking_window(booking)):
                logger.info(
                    f"Slot {date_str} {slot_start}-{slot_end} for mentor {mentor_id} "
                    f"overlaps booking {booking.booking_id}"
                )
                return ConflictResult(
                    has_conflict=True,
                    reason=ConflictReason.OVERLAPPING_BOOKING,
                    conflicting_booking=booking,
                )

        for override in self.store.get_mentor_availability_overrides(mentor_id):
            if override.date != date_str:
                continue
            if intervals_overlap(start, end, *override_window(override, mentor_timezone)):
                logger.info(
                    f"Slot {date_str} {slot_start}-{slot_end} for mentor {mentor_id} "
                    f"blocked by override ({override.reason or 'no reason given'})"
                )
                return ConflictResult(
                    has_conflict=True,
                    reason=ConflictReason.MENTOR_UNAVAILABLE,
                    conflicting_override=override,
                )

        return ConflictResult(has_conflict=False)
