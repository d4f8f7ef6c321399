"""Pydantic models for data validation and serialization."""

from .availability import AvailabilityOverride, DayOfWeek, WeeklyAvailabilitySlot
from .booking import Booking, BookingCreate, BookingStatus, DraftBooking
from .slot import AvailableDate, BookingOutcome, ConflictReason, ConflictResult, Slot
from .user import User, UserRole

__all__ = [
    "AvailabilityOverride",
    "AvailableDate",
    "Booking",
    "BookingCreate",
    "BookingOutcome",
    "BookingStatus",
    "ConflictReason",
    "ConflictResult",
    "DayOfWeek",
    "DraftBooking",
    "Slot",
    "User",
    "UserRole",
    "WeeklyAvailabilitySlot",
]
