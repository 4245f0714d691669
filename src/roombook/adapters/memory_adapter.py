from __future__ import annotations

import copy
import logging
from threading import Lock
from typing import Dict, Iterable, List, Optional

from roombook.models import Room

logger = logging.getLogger(__name__)


class InMemoryRoomRepository:
    """Dict-backed room store. Rooms go in and come out as copies."""

    def __init__(self, rooms: Optional[Iterable[Room]] = None):
        self._rooms: Dict[str, Room] = {}
        self._lock = Lock()
        for room in rooms or []:
            self.save(room)

    def add_room(self, room_id: str, name: Optional[str] = None) -> Room:
        room = Room(id=room_id, name=name)
        self.save(room)
        return room

    def find_by_id(self, room_id: str) -> Optional[Room]:
        with self._lock:
            room = self._rooms.get(room_id)
            return copy.deepcopy(room) if room else None

    def find_all(self) -> List[Room]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._rooms.values()]

    def save(self, room: Room) -> None:
        logger.debug(f"Saving room {room.id} ({len(room.bookings)} bookings)")
        with self._lock:
            self._rooms[room.id] = copy.deepcopy(room)

