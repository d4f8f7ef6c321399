"""
Custom exception classes for the booking core.
Provides specific error types instead of generic exceptions.

Booking conflicts are not exceptions: they are returned as ConflictResult
values so callers branch on data.
"""


class SchedulingError(Exception):
    """Base exception for scheduling operations."""

    pass


class ParseError(SchedulingError, ValueError):
    """Raised when a date, time, timezone or ISO timestamp is malformed."""

    pass


class NotFoundError(SchedulingError):
    """Raised when a record is not found."""

    pass


class UserNotFoundError(NotFoundError):
    """Raised when a mentor or mentee is not found."""

    pass


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    pass


class RepositoryError(SchedulingError):
    """Raised when the data store cannot be loaded, validated or saved."""

    pass


class WriteRaceError(SchedulingError):
    """
    Raised when a slot stopped being free between the conflict check and
    the booking write.

    The fresh conflict verdict is attached so the caller can show it.
    """

    def __init__(self, message: str, conflict=None):
        super().__init__(message)
        self.conflict = conflict
