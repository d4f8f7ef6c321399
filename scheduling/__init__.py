"""Slot availability, conflict detection and booking."""

from .booking import BookingService, MentorLocks
from .conflicts import ConflictChecker
from .slots import SlotCalculator, resolve_mentor_timezone

__all__ = [
    "BookingService",
    "ConflictChecker",
    "MentorLocks",
    "SlotCalculator",
    "resolve_mentor_timezone",
]
