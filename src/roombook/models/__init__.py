from .booking import Booking
from .room import Room

__all__ = [
    "Booking",
    "Room",
]
