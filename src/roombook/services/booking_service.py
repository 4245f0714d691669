from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from roombook.adapters.base import RoomRepository
from roombook.clock import Clock
from roombook.exceptions import (
    BookingStateError,
    InvalidArgumentError,
    NotificationError,
    RoomNotFoundError,
)
from roombook.models import Booking, Room
from roombook.services.notification_service import NotificationGateway

logger = logging.getLogger(__name__)

MSG_INVALID_BOOKING_ARGS = "Booking requires valid start and end times and a room id"
MSG_BOOKING_IN_PAST = "Cannot book a time in the past"
MSG_END_BEFORE_START = "End time must be after start time"
MSG_ROOM_NOT_FOUND = "Room does not exist"
MSG_MISSING_TIMES = "Must supply both start and end time"
MSG_INVALID_BOOKING_ID = "Booking id cannot be None"
MSG_CANNOT_CANCEL_STARTED = "Cannot cancel a booking that has started or finished"
MSG_MIXED_TIMEZONES = "Times must either all carry a time zone or none of them"


def _new_booking_id() -> str:
    return str(uuid.uuid4())


def _require_same_awareness(*values: datetime) -> None:
    # naive and aware datetimes cannot be compared
    if len({v.utcoffset() is not None for v in values}) > 1:
        raise InvalidArgumentError(MSG_MIXED_TIMEZONES)


class BookingService:
    """
    Entry point for booking, cancelling and availability queries.

    Every call loads fresh rooms from the repository, mutates them and saves
    them back. Notifications are sent after the save and their failures are
    only logged: a committed booking or cancellation is never undone.
    """

    def __init__(self, clock: Clock,
                 repository: RoomRepository,
                 notification_gateway: NotificationGateway,
                 id_factory: Optional[Callable[[], str]] = None,
                ):
        self.clock = clock
        self.repository = repository
        self.notifications = notification_gateway
        self.id_factory = id_factory or _new_booking_id

    # ------------------------------------
    # Operations
    # ------------------------------------

    def book_room(self, room_id: Optional[str], start: Optional[datetime], end: Optional[datetime]) -> bool:
        """
        Books `room_id` for [start, end).

        Returns False when the room is already taken for part of the interval.
        Raises InvalidArgumentError for bad input and RoomNotFoundError for an
        unknown room.
        """
        if not room_id or start is None or end is None:
            raise InvalidArgumentError(MSG_INVALID_BOOKING_ARGS)
        now = self.clock.now()
        _require_same_awareness(start, end, now)
        if start < now:
            raise InvalidArgumentError(MSG_BOOKING_IN_PAST)
        if end <= start:
            raise InvalidArgumentError(MSG_END_BEFORE_START)

        room = self.repository.find_by_id(room_id)
        if room is None:
            raise RoomNotFoundError(MSG_ROOM_NOT_FOUND)

        if not room.is_available(start, end):
            logger.info(f"Room {room_id} is not available for {start.isoformat()} -> {end.isoformat()}")
            return False

        booking = Booking(id=self.id_factory(), room_id=room_id, start=start, end=end)
        room.add_booking(booking)
        self.repository.save(room)
        logger.info(f"Booking {booking.id} created for room {room_id}")

        self._notify(self.notifications.send_booking_confirmation, booking)
        return True

    def cancel_booking(self, booking_id: Optional[str]) -> bool:
        """
        Cancels a booking that has not started yet.

        Returns False when no room holds `booking_id`. Raises BookingStateError
        if the booking has already started or finished.
        """
        if booking_id is None:
            raise InvalidArgumentError(MSG_INVALID_BOOKING_ID)

        found = self._find_booking(booking_id)
        if found is None:
            logger.info(f"Booking {booking_id} not found, nothing to cancel")
            return False

        room, booking = found
        if booking.has_started(self.clock.now()):
            raise BookingStateError(MSG_CANNOT_CANCEL_STARTED)

        room.remove_booking(booking_id)
        self.repository.save(room)
        logger.info(f"Booking {booking_id} cancelled in room {room.id}")

        self._notify(self.notifications.send_cancellation_confirmation, booking)
        return True

    def get_available_rooms(self, start: Optional[datetime], end: Optional[datetime]) -> List[Room]:
        """Rooms free for the whole of [start, end), in repository order."""
        if start is None or end is None:
            raise InvalidArgumentError(MSG_MISSING_TIMES)
        _require_same_awareness(start, end)
        if end <= start:
            raise InvalidArgumentError(MSG_END_BEFORE_START)

        return [room for room in self.repository.find_all() if room.is_available(start, end)]

    # ------------------------------------
    # Helpers
    # ------------------------------------

    def _find_booking(self, booking_id: str) -> Optional[Tuple[Room, Booking]]:
        # full scan; rooms are few
        for room in self.repository.find_all():
            if room.has_booking(booking_id):
                return room, room.get_booking(booking_id)
        return None

    def _notify(self, send: Callable[[Booking], None], booking: Booking) -> None:
        try:
            send(booking)
        except NotificationError as e:
            logger.warning(f"Notification for booking {booking.id} failed, state kept: {e}")
