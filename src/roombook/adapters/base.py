from __future__ import annotations

from typing import Protocol, runtime_checkable, Optional, List

from roombook.models import Room


@runtime_checkable
class RoomRepository(Protocol):
    """Storage for Room aggregates. A room is saved together with all its bookings."""

    def find_by_id(self, room_id: str) -> Optional[Room]: ...
    def find_all(self) -> List[Room]: ...

    # idempotent upsert
    def save(self, room: Room) -> None: ...
