"""
Unit tests for the JSON fixture data store.
"""

import json
import threading
from datetime import datetime, timezone

import pytest

from db.json_store import IdGenerator, JsonStore, load_store
from models.booking import BookingCreate, BookingStatus
from utils.exceptions import BookingNotFoundError, RepositoryError

UTC = timezone.utc


class TestIdGenerator:
    """Test booking id generation."""

    def test_starts_after_existing_ids(self):
        generator = IdGenerator("booking_", 2, existing=["booking_01", "booking_07", "legacy"])
        assert generator.next_id() == "booking_08"
        assert generator.next_id() == "booking_09"

    def test_width_is_minimum_not_maximum(self):
        generator = IdGenerator("booking_", 2, existing=["booking_99"])
        assert generator.next_id() == "booking_100"

    def test_unique_across_threads(self):
        generator = IdGenerator("booking_", 2)
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                new_id = generator.next_id()
                with lock:
                    ids.append(new_id)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 400
        assert len(set(ids)) == 400


class TestJsonStore:
    """Test store queries and writes."""

    @pytest.fixture
    def store(self, fixture_path):
        return JsonStore.from_file(fixture_path)

    def test_loads_bundled_fixture(self, store):
        assert len(store.get_users()) == 5
        assert store.get_user_by_id("mentor_01").timezone == "America/New_York"
        assert store.get_user_by_id("nobody") is None

    def test_weekly_availability_filtered_by_mentor(self, store):
        rows = store.get_mentor_weekly_availability("mentor_02")
        assert {row.mentor_id for row in rows} == {"mentor_02"}
        assert len(rows) == 2

    def test_overrides_filtered_by_mentor(self, store):
        overrides = store.get_mentor_availability_overrides("mentor_01")
        assert len(overrides) == 1
        assert overrides[0].date == "2025-01-10"

    def test_get_bookings_filters(self, store):
        assert len(store.get_bookings()) == 3
        assert len(store.get_bookings(mentor_id="mentor_01")) == 2
        assert len(store.get_bookings(mentee_id="mentee_01")) == 2

        confirmed = store.get_bookings(mentor_id="mentor_01", status=BookingStatus.CONFIRMED)
        assert [b.booking_id for b in confirmed] == ["booking_01"]

    def test_stored_timestamps_are_instants(self, store):
        booking = store.get_booking_by_id("booking_01")
        assert booking.start_datetime == datetime(2025, 1, 6, 14, 0, tzinfo=UTC)

    def test_create_booking_assigns_next_id_and_confirms(self, store):
        booking = store.create_booking(
            BookingCreate(
                mentor_id="mentor_01",
                mentee_id="mentee_02",
                start_datetime=datetime(2025, 1, 13, 14, 0, tzinfo=UTC),
                end_datetime=datetime(2025, 1, 13, 15, 0, tzinfo=UTC),
            )
        )

        assert booking.booking_id == "booking_04"
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.created_at is not None
        assert store.get_booking_by_id("booking_04") == booking

    def test_update_booking_status(self, store):
        updated = store.update_booking_status("booking_01", BookingStatus.CANCELLED)

        assert updated.status == BookingStatus.CANCELLED
        assert store.get_bookings(mentor_id="mentor_01", status=BookingStatus.CONFIRMED) == []

    def test_update_booking_status_missing(self, store):
        with pytest.raises(BookingNotFoundError):
            store.update_booking_status("booking_99", BookingStatus.CANCELLED)

    def test_update_draft_booking_merges(self, store):
        store.update_draft_booking(mentor_id="mentor_01", selected_date="2025-01-13")
        draft = store.update_draft_booking(slot_start="09:00", slot_end="10:00")

        assert draft.mentor_id == "mentor_01"
        assert draft.selected_date == "2025-01-13"
        assert draft.slot_start == "09:00"
        assert store.get_draft_booking() == draft

    def test_save_round_trips_storage_fields(self, store, tmp_path):
        target = store.save(tmp_path / "out.json")
        data = json.loads(target.read_text(encoding="utf-8"))

        assert set(data) == {
            "users",
            "mentor_weekly_availability",
            "mentor_availability_overrides",
            "bookings",
            "draft_booking",
        }
        row = data["mentor_weekly_availability"][0]
        assert row["day_of_week"] == "MONDAY"
        assert row["slot_start"] == "09:00"
        assert data["bookings"][0]["status"] == "CONFIRMED"

        reloaded = JsonStore.from_file(target)
        assert reloaded.get_booking_by_id("booking_01") == store.get_booking_by_id("booking_01")

    def test_save_without_path_fails(self):
        with pytest.raises(RepositoryError):
            JsonStore.from_dict({}).save()


class TestLoading:
    """Test fixture loading errors."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(RepositoryError):
            JsonStore.from_file(tmp_path / "missing.json")

    def test_not_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RepositoryError):
            JsonStore.from_file(path)

    def test_invalid_row(self):
        with pytest.raises(RepositoryError):
            JsonStore.from_dict(
                {
                    "mentor_weekly_availability": [
                        {"mentor_id": "m", "day_of_week": "MONDAY", "slot_start": "9", "slot_end": "10:00"}
                    ]
                }
            )

    def test_invalid_booking_timestamp(self):
        with pytest.raises(RepositoryError):
            JsonStore.from_dict(
                {
                    "bookings": [
                        {
                            "booking_id": "booking_01",
                            "mentor_id": "m",
                            "mentee_id": "e",
                            "start_datetime": "yesterday",
                            "end_datetime": "today",
                            "status": "CONFIRMED",
                        }
                    ]
                }
            )

    def test_empty_store(self):
        store = JsonStore.from_dict({})
        assert store.get_users() == []
        assert store.get_bookings() == []
        assert store.get_draft_booking().mentor_id is None

    def test_load_store_uses_given_path(self, fixture_path):
        store = load_store(fixture_path)
        assert store.path == fixture_path
