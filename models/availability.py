"""Availability models: recurring weekly windows and one-off overrides."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.constants import WEEKDAY_NAMES
from utils.validation import validate_date_string, validate_time_string


class DayOfWeek(str, Enum):
    """Day names as stored in the weekly availability rows."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        """Map Python's date.weekday() (Monday == 0) to a day name."""
        return cls(WEEKDAY_NAMES[weekday])


def _check_time(value: str) -> str:
    if not validate_time_string(value):
        raise ValueError(f"time must be HH:MM (24-hour), got {value!r}")
    return value


class WeeklyAvailabilitySlot(BaseModel):
    """
    Recurring weekly open window in the mentor's own timezone.

    Times are timezone-naive "HH:MM" strings; they only become instants once
    combined with a calendar date and the mentor's zone.
    """

    availability_id: Optional[str] = None
    mentor_id: str
    day_of_week: DayOfWeek
    slot_start: str = Field(..., description="Local start time, HH:MM")
    slot_end: str = Field(..., description="Local end time, HH:MM")

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "mentor_id": "mentor_01",
                "day_of_week": "MONDAY",
                "slot_start": "09:00",
                "slot_end": "10:00",
            }
        }

    @field_validator("day_of_week", mode="before")
    @classmethod
    def _upper_day(cls, value):
        return value.upper() if isinstance(value, str) else value

    @field_validator("slot_start", "slot_end")
    @classmethod
    def _valid_time(cls, value: str) -> str:
        return _check_time(value)

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.slot_start >= self.slot_end:
            raise ValueError("slot_start must be earlier than slot_end")
        return self


class AvailabilityOverride(BaseModel):
    """Explicit block of mentor time on one calendar date."""

    override_id: Optional[str] = None
    mentor_id: str
    date: str = Field(..., description="Calendar date, YYYY-MM-DD")
    slot_start: str
    slot_end: str
    reason: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "mentor_id": "mentor_01",
                "date": "2025-01-10",
                "slot_start": "14:00",
                "slot_end": "16:00",
                "reason": "maintenance",
            }
        }

    @field_validator("date")
    @classmethod
    def _valid_date(cls, value: str) -> str:
        if not validate_date_string(value):
            raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
        return value

    @field_validator("slot_start", "slot_end")
    @classmethod
    def _valid_time(cls, value: str) -> str:
        return _check_time(value)

    @model_validator(mode="after")
    def _start_before_end(self):
        if self.slot_start >= self.slot_end:
            raise ValueError("slot_start must be earlier than slot_end")
        return self
