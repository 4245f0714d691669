from .base import RoomRepository
from .memory_adapter import InMemoryRoomRepository
from .sqlite_adapter import SQLiteRoomRepository

__all__ = [
    "RoomRepository",
    "InMemoryRoomRepository",
    "SQLiteRoomRepository",
]
