from __future__ import annotations
from typing import Optional
import logging
from datetime import datetime

from roombook.tools import tool, get_booking_service
from roombook.exceptions import BookingError, DatabaseError
from roombook.models import Booking, Room

logger = logging.getLogger(__name__)


# ------------------------------------
# Helpers
# ------------------------------------

def _parse_datetime(value: str) -> Optional[datetime]:
    """Parses an ISO-8601 timestamp into naive local time, None if it is malformed."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None
    if parsed.utcoffset() is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _format_interval(start: datetime, end: datetime) -> str:
    return f"{start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M}"


def _find_new_booking(room: Optional[Room], start: datetime, end: datetime) -> Optional[Booking]:
    # a room holds at most one booking for a given interval
    if room is None:
        return None
    for booking in room.list_bookings():
        if booking.start == start and booking.end == end:
            return booking
    return None


# ------------------------------------
# TOOLS IMPLEMENTATION
# ------------------------------------

@tool
def book_room(room_id: str, start: str, end: str) -> str:
    """
    Books a room for [start, end).

    Args:
        room_id: Id of the room.
        start: Start time (ISO-8601).
        end: End time (ISO-8601).
    """
    start_dt = _parse_datetime(start)
    end_dt = _parse_datetime(end)
    if start_dt is None or end_dt is None:
        return "❌ Error: Invalid time format. Use YYYY-MM-DDTHH:MM."

    service = get_booking_service()
    try:
        booked = service.book_room(room_id, start_dt, end_dt)
    except BookingError as e:
        return f"❌ Error: {e.message}"
    except DatabaseError as e:
        logger.error(f"Database error while booking room {room_id}: {e}")
        return "❌ Error: The booking could not be stored. Please try again."

    if not booked:
        return f"❌ Room {room_id} is already booked for part of {_format_interval(start_dt, end_dt)}."
    try:
        booking = _find_new_booking(service.repository.find_by_id(room_id), start_dt, end_dt)
    except DatabaseError as e:
        logger.error(f"Booking stored but could not be read back for room {room_id}: {e}")
        booking = None
    result = f"✅ Room {room_id} booked for {_format_interval(start_dt, end_dt)}."
    if booking is not None:
        result += f" Booking id: {booking.id} ({booking.get_reference_code()})"
    return result


@tool
def cancel_booking(booking_id: str) -> str:
    """
    Cancels a booking that has not started yet.
    """
    try:
        cancelled = get_booking_service().cancel_booking(booking_id)
    except BookingError as e:
        return f"❌ Error: {e.message}"
    except DatabaseError as e:
        logger.error(f"Database error while cancelling booking {booking_id}: {e}")
        return "❌ Error: The cancellation could not be stored. Please try again."

    if not cancelled:
        return f"❌ Error: Booking {booking_id} not found."
    return f"✅ Booking {booking_id} has been cancelled."


@tool
def list_available_rooms(start: str, end: str) -> str:
    """
    Lists rooms that are free for the whole interval.
    """
    start_dt = _parse_datetime(start)
    end_dt = _parse_datetime(end)
    if start_dt is None or end_dt is None:
        return "❌ Error: Invalid time format. Use YYYY-MM-DDTHH:MM."

    try:
        rooms = get_booking_service().get_available_rooms(start_dt, end_dt)
    except BookingError as e:
        return f"❌ Error: {e.message}"
    except DatabaseError as e:
        logger.error(f"Database error while listing rooms: {e}")
        return "❌ Error: Rooms could not be loaded. Please try again."

    if not rooms:
        return f"No rooms are free for {_format_interval(start_dt, end_dt)}."

    result = f"Free rooms for {_format_interval(start_dt, end_dt)}:\n"
    for room in rooms:
        result += f"• {room.name} (id: {room.id})\n"
    return result
