"""Booking models for mentor sessions."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator


class BookingStatus(str, Enum):
    """Booking status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


def _ensure_aware(value: datetime) -> datetime:
    # Stored timestamps without an offset are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Booking(BaseModel):
    """Booking model."""

    booking_id: str
    mentor_id: str
    mentee_id: str
    start_datetime: datetime
    end_datetime: datetime
    status: BookingStatus = BookingStatus.CONFIRMED
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "booking_id": "booking_01",
                "mentor_id": "mentor_01",
                "mentee_id": "mentee_01",
                "start_datetime": "2025-01-06T09:00:00-05:00",
                "end_datetime": "2025-01-06T10:00:00-05:00",
                "status": "CONFIRMED",
            }
        }

    @field_validator("start_datetime", "end_datetime", "created_at")
    @classmethod
    def _aware(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _ensure_aware(value) if value is not None else None

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.start_datetime >= self.end_datetime:
            raise ValueError("start_datetime must be earlier than end_datetime")
        return self


class BookingCreate(BaseModel):
    """Booking creation model."""

    mentor_id: str
    mentee_id: str
    start_datetime: datetime
    end_datetime: datetime
    notes: Optional[str] = None

    @field_validator("start_datetime", "end_datetime")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.start_datetime >= self.end_datetime:
            raise ValueError("start_datetime must be earlier than end_datetime")
        return self


class DraftBooking(BaseModel):
    """In-progress booking selection kept between screens."""

    mentor_id: Optional[str] = None
    mentee_id: Optional[str] = None
    selected_date: Optional[str] = None
    slot_start: Optional[str] = None
    slot_end: Optional[str] = None

