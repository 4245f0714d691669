from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any


@dataclass(frozen=True)
class Booking:
    """A room reserved for the half-open interval [start, end)."""

    id: str
    room_id: str
    start: datetime
    end: datetime

    # ------------------------------------
    # Methods
    # ------------------------------------

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Half-open intersection: touching endpoints do not overlap."""
        return self.start < end and start < self.end

    def has_started(self, now: datetime) -> bool:
        return self.start <= now

    def get_reference_code(self) -> str:
        """'BKG-1A2B3C4D' style short code for messages."""
        return f"BKG-{self.id.replace('-', '')[:8].upper()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "room_id": self.room_id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Booking:
        start = data["start"]
        end = data["end"]
        if isinstance(start, str):
            start = datetime.fromisoformat(start)
        if isinstance(end, str):
            end = datetime.fromisoformat(end)
        return cls(id=data["id"], room_id=data["room_id"], start=start, end=end)
