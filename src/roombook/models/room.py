from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List

from .booking import Booking


@dataclass
class Room:
    """
    A bookable room and the bookings it owns.

    The room is the only authority on its own booking set: as long as callers
    check `is_available` before `add_booking`, no two stored bookings overlap.
    """

    id: str
    name: Optional[str] = field(default=None)
    bookings: Dict[str, Booking] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = self.id

    # ------------------------------------
    # Availability
    # ------------------------------------

    def is_available(self, start: datetime, end: datetime) -> bool:
        """True if no booking intersects [start, end)."""
        return not any(b.overlaps(start, end) for b in self.bookings.values())

    # ------------------------------------
    # Booking set
    # ------------------------------------

    def has_booking(self, booking_id: str) -> bool:
        return booking_id in self.bookings

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return self.bookings.get(booking_id)

    def add_booking(self, booking: Booking) -> None:
        # Availability is checked by the caller.
        self.bookings[booking.id] = booking

    def remove_booking(self, booking_id: str) -> None:
        self.bookings.pop(booking_id, None)

    def list_bookings(self) -> List[Booking]:
        return sorted(self.bookings.values(), key=lambda b: b.start)

    # ------------------------------------
    # Serialization
    # ------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bookings": [b.to_dict() for b in self.list_bookings()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Room:
        bookings = [Booking.from_dict(b) for b in data.get("bookings") or []]
        return cls(
            id=data["id"],
            name=data.get("name"),
            bookings={b.id: b for b in bookings},
        )
