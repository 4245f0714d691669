"""Custom exceptions for roombook."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category tag carried by every booking rule violation."""

    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    STATE_VIOLATION = "state_violation"


class RoomBookError(Exception):
    """Base exception for all roombook errors."""
    pass


class ConfigurationError(RoomBookError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(RoomBookError):
    """Raised when repository storage operations fail."""
    pass


class NotificationError(RoomBookError):
    """Raised by a notification gateway when a message could not be delivered."""
    pass


class BookingError(RoomBookError):
    """Raised when a booking request breaks a business rule."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgumentError(BookingError, ValueError):
    """Raised for missing ids, missing times and malformed intervals."""

    kind = ErrorKind.INVALID_ARGUMENT


class RoomNotFoundError(InvalidArgumentError):
    """Raised when a booking names a room the repository does not know."""

    kind = ErrorKind.NOT_FOUND


class BookingStateError(BookingError, RuntimeError):
    """Raised when a booking can no longer be changed (already started or finished)."""

    kind = ErrorKind.STATE_VIOLATION
