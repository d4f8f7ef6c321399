"""
JSON fixture data store with read queries and pass-through writes.
Holds users, weekly availability, overrides, bookings and the draft booking.

The store is an explicit object owned by the hosting application and passed
to the scheduling services. It is not durable: save() rewrites the fixture
file on demand and nothing more.

Fixture layout (field names are part of the storage contract):
-------------------------------------------------------------
{
  "users": [{"user_id": "mentor_01", "name": "...", "timezone": "America/New_York"}],
  "mentor_weekly_availability": [
      {"mentor_id": "mentor_01", "day_of_week": "MONDAY",
       "slot_start": "09:00", "slot_end": "10:00"}
  ],
  "mentor_availability_overrides": [
      {"mentor_id": "mentor_01", "date": "2025-01-10",
       "slot_start": "14:00", "slot_end": "16:00", "reason": "maintenance"}
  ],
  "bookings": [
      {"booking_id": "booking_01", "mentor_id": "mentor_01", "mentee_id": "mentee_01",
       "start_datetime": "2025-01-06T09:00:00-05:00",
       "end_datetime": "2025-01-06T10:00:00-05:00", "status": "CONFIRMED"}
  ],
  "draft_booking": {"mentor_id": null, ...}
}
"""

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from config import settings
from models.availability import AvailabilityOverride, WeeklyAvailabilitySlot
from models.booking import Booking, BookingCreate, BookingStatus, DraftBooking
from models.user import User
from utils.datetime_utils import parse_instant, utc_now
from utils.exceptions import BookingNotFoundError, ParseError, RepositoryError
from utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


class IdGenerator:
    """
    Monotonic, thread-safe id generator.

    Seeded past the highest numeric suffix already in use so ids stay unique
    even when records were removed from the fixture.
    """

    def __init__(self, prefix: str, width: int = 2, existing: Iterable[str] = ()):
        self.prefix = prefix
        self.width = width
        self._lock = threading.Lock()
        self._pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
        self._last = max(
            (int(m.group(1)) for m in map(self._pattern.match, existing) if m),
            default=0,
        )

    def next_id(self) -> str:
        """Return the next unused id, e.g. booking_07."""
        with self._lock:
            self._last += 1
            return f"{self.prefix}{self._last:0{self.width}d}"


class JsonStore:
    """
    In-memory data store backed by a JSON fixture.

    All public methods are synchronised on one re-entrant lock, so the store
    can be shared between threads.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None, path: Optional[Path] = None):
        """
        Build the store from raw fixture data.

        Raises:
            RepositoryError: If a row fails validation
        """
        data = data or {}
        self.path = Path(path) if path else None
        self._lock = threading.RLock()

        try:
            self._users: List[User] = [User(**row) for row in data.get("users", [])]
            self._weekly: List[WeeklyAvailabilitySlot] = [
                WeeklyAvailabilitySlot(**row)
                for row in data.get("mentor_weekly_availability", [])
            ]
            self._overrides: List[AvailabilityOverride] = [
                AvailabilityOverride(**row)
                for row in data.get("mentor_availability_overrides", [])
            ]
            self._bookings: List[Booking] = [
                self._parse_booking(row) for row in data.get("bookings", [])
            ]
            self._draft = DraftBooking(**(data.get("draft_booking") or {}))
        except (ValidationError, ParseError, TypeError) as e:
            raise RepositoryError(f"Invalid fixture data: {e}") from e

        self.id_generator = IdGenerator(
            settings.booking_id_prefix,
            settings.booking_id_width,
            existing=(b.booking_id for b in self._bookings),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JsonStore":
        """Build a store from an in-memory mapping (no backing file)."""
        return cls(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JsonStore":
        """
        Load a store from a JSON fixture file.

        Raises:
            RepositoryError: If the file is missing, not JSON, or invalid
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise RepositoryError(f"Failed to load data file {path}: {e}") from e

        store = cls(data, path=path)
        logger.info(
            f"Loaded {path}: {len(store._users)} users, {len(store._weekly)} weekly slots, "
            f"{len(store._overrides)} overrides, {len(store._bookings)} bookings"
        )
        return store

    # ========== User Operations ==========

    def get_users(self) -> List[User]:
        """Get all users."""
        with self._lock:
            return list(self._users)

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None."""
        with self._lock:
            return next((u for u in self._users if u.user_id == user_id), None)

    # ========== Availability Operations ==========

    def get_mentor_weekly_availability(self, mentor_id: str) -> List[WeeklyAvailabilitySlot]:
        """Get all weekly availability rows for a mentor."""
        with self._lock:
            return [row for row in self._weekly if row.mentor_id == mentor_id]

    def get_mentor_availability_overrides(self, mentor_id: str) -> List[AvailabilityOverride]:
        """Get all availability overrides for a mentor."""
        with self._lock:
            return [row for row in self._overrides if row.mentor_id == mentor_id]

    # ========== Booking Operations ==========

    def get_bookings(
        self,
        mentor_id: Optional[str] = None,
        mentee_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        """
        Get bookings matching all given filters.

        Args:
            mentor_id: Filter by mentor
            mentee_id: Filter by mentee
            status: Filter by booking status

        Returns:
            Bookings in insertion order
        """
        with self._lock:
            bookings = list(self._bookings)

        if mentor_id:
            bookings = [b for b in bookings if b.mentor_id == mentor_id]
        if mentee_id:
            bookings = [b for b in bookings if b.mentee_id == mentee_id]
        if status:
            bookings = [b for b in bookings if b.status == status]
        return bookings

    def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        """Get booking by ID."""
        with self._lock:
            return next((b for b in self._bookings if b.booking_id == booking_id), None)

    def create_booking(self, booking_data: BookingCreate) -> Booking:
        """
        Create a new confirmed booking.

        No conflict check happens here; callers go through BookingService,
        which checks and writes under the mentor's lock.
        """
        booking = Booking(
            booking_id=self.id_generator.next_id(),
            status=BookingStatus.CONFIRMED,
            created_at=utc_now(),
            **booking_data.model_dump(),
        )
        with self._lock:
            self._bookings.append(booking)

        logger.info(
            f"Created booking {booking.booking_id} for mentor {booking.mentor_id} "
            f"({booking.start_datetime.isoformat()} - {booking.end_datetime.isoformat()})"
        )
        return booking

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Booking:
        """
        Update booking status.

        Raises:
            BookingNotFoundError: If no booking has this ID
        """
        with self._lock:
            for index, booking in enumerate(self._bookings):
                if booking.booking_id == booking_id:
                    updated = booking.model_copy(update={"status": BookingStatus(status).value})
                    self._bookings[index] = updated
                    return updated

        raise BookingNotFoundError(f"Booking not found: {booking_id}")

    # ========== Draft Booking ==========

    def get_draft_booking(self) -> DraftBooking:
        """Get the current draft booking."""
        with self._lock:
            return self._draft

    def update_draft_booking(self, **fields: Any) -> DraftBooking:
        """Merge the given fields into the draft booking and return it."""
        with self._lock:
            merged = {**self._draft.model_dump(), **fields}
            self._draft = DraftBooking(**merged)
            return self._draft

    # ========== Persistence ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the store back into the fixture layout."""
        with self._lock:
            return {
                "users": [u.model_dump(mode="json", exclude_none=True) for u in self._users],
                "mentor_weekly_availability": [
                    row.model_dump(mode="json", exclude_none=True) for row in self._weekly
                ],
                "mentor_availability_overrides": [
                    row.model_dump(mode="json", exclude_none=True) for row in self._overrides
                ],
                "bookings": [
                    b.model_dump(mode="json", exclude_none=True) for b in self._bookings
                ],
                "draft_booking": self._draft.model_dump(mode="json"),
            }

    def save(self, path: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the store to its fixture file (or to path).

        Raises:
            RepositoryError: If there is no target path or the write fails
        """
        target = Path(path) if path else self.path
        if target is None:
            raise RepositoryError("No data file to save to")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise RepositoryError(f"Failed to save data file {target}: {e}") from e
        return target

    # ========== Helper Methods ==========

    def _parse_booking(self, item: dict) -> Booking:
        """
        Parse booking data from the fixture.

        Args:
            item: Raw booking row

        Returns:
            Parsed Booking object
        """
        item = dict(item)
        for field in ["start_datetime", "end_datetime", "created_at"]:
            if item.get(field):
                item[field] = parse_instant(item[field])
        if item.get("status"):
            item["status"] = str(item["status"]).upper()
        return Booking(**item)


def load_store(path: Optional[Union[str, Path]] = None) -> JsonStore:
    """
    Load the data store from path (default: settings.data_file) and set up
    package logging from settings.
    """
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
    )
    return JsonStore.from_file(path or settings.data_file)
