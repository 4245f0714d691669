"""
Tests for the Room and Booking models.
"""
from datetime import datetime, timedelta

from roombook.models import Booking, Room

START = datetime(2026, 3, 10, 10, 0)
END = datetime(2026, 3, 10, 11, 0)
HOUR = timedelta(hours=1)


def make_room() -> Room:
    room = Room(id="room-1")
    room.add_booking(Booking("b-1", "room-1", START, END))
    return room


class TestBooking:

    def test_touching_intervals_do_not_overlap(self):
        booking = Booking("b-1", "room-1", START, END)
        assert not booking.overlaps(END, END + HOUR)
        assert not booking.overlaps(START - HOUR, START)

    def test_partial_and_contained_intervals_overlap(self):
        booking = Booking("b-1", "room-1", START, END)
        assert booking.overlaps(START + timedelta(minutes=30), END + HOUR)
        assert booking.overlaps(START - HOUR, START + timedelta(minutes=1))
        assert booking.overlaps(START + timedelta(minutes=15), END - timedelta(minutes=15))
        assert booking.overlaps(START - HOUR, END + HOUR)

    def test_has_started_includes_start_instant(self):
        booking = Booking("b-1", "room-1", START, END)
        assert booking.has_started(START)
        assert booking.has_started(END + HOUR)
        assert not booking.has_started(START - timedelta(seconds=1))

    def test_reference_code(self):
        booking = Booking("1a2b3c4d-0000-0000-0000-000000000000", "room-1", START, END)
        assert booking.get_reference_code() == "BKG-1A2B3C4D"

    def test_from_dict_parses_iso_timestamps(self):
        data = Booking("b-1", "room-1", START, END).to_dict()
        assert data["start"] == "2026-03-10T10:00:00"
        assert Booking.from_dict(data) == Booking("b-1", "room-1", START, END)


class TestRoom:

    def test_name_defaults_to_id(self):
        assert Room(id="room-1").name == "room-1"
        assert Room(id="room-1", name="Board room").name == "Board room"

    def test_empty_room_is_available(self):
        assert Room(id="room-1").is_available(START, END)

    def test_same_interval_is_unavailable(self):
        assert not make_room().is_available(START, END)

    def test_adjacent_intervals_are_available(self):
        room = make_room()
        assert room.is_available(END, END + HOUR)
        assert room.is_available(START - HOUR, START)

    def test_overlapping_interval_is_unavailable(self):
        room = make_room()
        assert not room.is_available(START + timedelta(minutes=30), END + HOUR)

    def test_has_and_get_booking(self):
        room = make_room()
        assert room.has_booking("b-1")
        assert room.get_booking("b-1").start == START
        assert not room.has_booking("missing")
        assert room.get_booking("missing") is None

    def test_remove_booking_frees_interval(self):
        room = make_room()
        room.remove_booking("b-1")
        assert not room.has_booking("b-1")
        assert room.is_available(START, END)

    def test_remove_missing_booking_is_noop(self):
        room = make_room()
        room.remove_booking("missing")
        assert room.has_booking("b-1")
        assert len(room.bookings) == 1

    def test_list_bookings_sorted_by_start(self):
        room = make_room()
        room.add_booking(Booking("b-0", "room-1", START - 2 * HOUR, START - HOUR))
        assert [b.id for b in room.list_bookings()] == ["b-0", "b-1"]

    def test_dict_conversion_keeps_bookings(self):
        room = make_room()
        restored = Room.from_dict(room.to_dict())
        assert restored.id == "room-1"
        assert restored.bookings == room.bookings
