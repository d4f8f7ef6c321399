"""
Pytest configuration and shared fixtures.
"""

from datetime import date, timedelta
from pathlib import Path

import pytest

from db.json_store import JsonStore
from sample_data import MENTEE_ID, MENTOR_ID, MENTOR_TZ, MONDAY


@pytest.fixture
def make_store():
    """Build a JsonStore from row lists; mentor_01 and mentee_01 always exist."""

    def _make(weekly=(), overrides=(), bookings=(), users=None):
        return JsonStore.from_dict(
            {
                "users": users
                if users is not None
                else [
                    {
                        "user_id": MENTOR_ID,
                        "name": "Test Mentor",
                        "role": "MENTOR",
                        "timezone": MENTOR_TZ,
                    },
                    {"user_id": MENTEE_ID, "name": "Test Mentee", "role": "MENTEE"},
                ],
                "mentor_weekly_availability": list(weekly),
                "mentor_availability_overrides": list(overrides),
                "bookings": list(bookings),
            }
        )

    return _make


@pytest.fixture
def weekly_row():
    """Factory for weekly availability rows of mentor_01."""

    def _row(day="MONDAY", start="09:00", end="10:00", mentor_id=MENTOR_ID):
        return {
            "mentor_id": mentor_id,
            "day_of_week": day,
            "slot_start": start,
            "slot_end": end,
        }

    return _row


@pytest.fixture
def booking_row():
    """Factory for stored booking rows of mentor_01."""
    counter = {"n": 0}

    def _row(start, end, status="CONFIRMED", mentor_id=MENTOR_ID):
        counter["n"] += 1
        return {
            "booking_id": f"booking_{counter['n']:02d}",
            "mentor_id": mentor_id,
            "mentee_id": MENTEE_ID,
            "start_datetime": start,
            "end_datetime": end,
            "status": status,
        }

    return _row


@pytest.fixture
def override_row():
    """Factory for override rows of mentor_01."""

    def _row(date_str=MONDAY, start="09:00", end="10:00", reason="maintenance", mentor_id=MENTOR_ID):
        return {
            "mentor_id": mentor_id,
            "date": date_str,
            "slot_start": start,
            "slot_end": end,
            "reason": reason,
        }

    return _row


@pytest.fixture
def next_monday() -> str:
    """The first Monday strictly after today, as YYYY-MM-DD."""
    today = date.today()
    return (today + timedelta(days=(7 - today.weekday()) % 7 or 7)).isoformat()


@pytest.fixture
def fixture_path() -> Path:
    """Path of the bundled sample data file."""
    return Path(__file__).resolve().parent.parent / "data" / "database.json"
