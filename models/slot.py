"""Slot and conflict models computed by the scheduling services."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from models.availability import AvailabilityOverride
from models.booking import Booking
from utils.constants import BOOKING_CONFLICT_MESSAGE, MENTOR_UNAVAILABLE_MESSAGE


class Slot(BaseModel):
    """
    Bookable time window.

    Carries both the absolute instants used for comparisons and the local
    wall-clock strings shown to the mentee. Rebuilt on every query.
    """

    start: datetime
    end: datetime
    start_time: str = Field(..., description="Local start time, HH:MM")
    end_time: str = Field(..., description="Local end time, HH:MM")

    class Config:
        json_schema_extra = {
            "example": {
                "start": "2025-01-06T14:00:00Z",
                "end": "2025-01-06T15:00:00Z",
                "start_time": "09:00",
                "end_time": "10:00",
            }
        }


class ConflictReason(str, Enum):
    """Why a candidate slot cannot be booked."""

    OVERLAPPING_BOOKING = "overlapping_booking"
    MENTOR_UNAVAILABLE = "mentor_unavailable"


class ConflictResult(BaseModel):
    """Verdict of a conflict check."""

    has_conflict: bool
    reason: Optional[ConflictReason] = None
    conflicting_booking: Optional[Booking] = None
    conflicting_override: Optional[AvailabilityOverride] = None

    class Config:
        use_enum_values = True

    @property
    def message(self) -> Optional[str]:
        """Human-readable explanation, or None when there is no conflict."""
        if not self.has_conflict:
            return None
        if self.reason == ConflictReason.OVERLAPPING_BOOKING:
            return BOOKING_CONFLICT_MESSAGE
        if self.conflicting_override and self.conflicting_override.reason:
            return self.conflicting_override.reason
        return MENTOR_UNAVAILABLE_MESSAGE


class AvailableDate(BaseModel):
    """Date that has at least one open slot."""

    date: str
    slots_count: int = Field(..., ge=1)


class BookingOutcome(BaseModel):
    """Result of a confirm attempt: either a booking or a conflict."""

    booking: Optional[Booking] = None
    conflict: Optional[ConflictResult] = None

    @property
    def succeeded(self) -> bool:
        return self.booking is not None
