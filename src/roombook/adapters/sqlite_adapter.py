from __future__ import annotations

import sqlite3
import logging
from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from roombook.exceptions import DatabaseError
from roombook.models import Booking, Room

logger = logging.getLogger(__name__)


class SQLiteRoomRepository:
    """SQLite room store. A room row plus its booking rows form one aggregate."""

    def __init__(self, db_url: str):
        # Format: sqlite:///path
        if db_url.startswith("sqlite:///"):
            self.db_path = db_url.replace("sqlite:///", "")
        else:
            self.db_path = db_url

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"SQLiteRoomRepository started. Database path: {self.db_path}")

    def _conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            return conn
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")
            raise DatabaseError(f"Could not connect to database: {e}") from e

    # ------------------------------------
    # Lifecycle
    # ------------------------------------
    def init(self) -> None:
        """Creates the tables if they do not exist yet."""
        logger.info("Checking/creating database tables...")
        try:
            with closing(self._conn()) as conn, conn:
                cur = conn.cursor()

                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS rooms (
                        seq INTEGER PRIMARY KEY AUTOINCREMENT,
                        id TEXT NOT NULL UNIQUE,
                        name TEXT NOT NULL,
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
                    )
                    """
                )

                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS bookings (
                        id TEXT PRIMARY KEY,
                        room_id TEXT NOT NULL,
                        start_time TEXT NOT NULL,
                        end_time TEXT NOT NULL,
                        FOREIGN KEY(room_id) REFERENCES rooms(id) ON DELETE CASCADE
                    )
                    """
                )
                cur.execute("CREATE INDEX IF NOT EXISTS idx_bookings_room ON bookings(room_id)")
        except sqlite3.Error as e:
            logger.error(f"SQLite error while creating tables: {e}")
            raise DatabaseError(f"Table initialisation failed: {e}") from e

    # ------------------------------------
    # Helpers
    # ------------------------------------
    @staticmethod
    def _booking_from_row(row: sqlite3.Row) -> Booking:
        return Booking(
            id=row["id"],
            room_id=row["room_id"],
            start=datetime.fromisoformat(row["start_time"]),
            end=datetime.fromisoformat(row["end_time"]),
        )

    def _load_bookings(self, conn: sqlite3.Connection, room_ids: List[str]) -> Dict[str, List[Booking]]:
        grouped: Dict[str, List[Booking]] = {room_id: [] for room_id in room_ids}
        if not room_ids:
            return grouped
        placeholders = ", ".join("?" * len(room_ids))
        cur = conn.execute(
            f"SELECT * FROM bookings WHERE room_id IN ({placeholders}) ORDER BY start_time",
            tuple(room_ids),
        )
        for row in cur.fetchall():
            grouped[row["room_id"]].append(self._booking_from_row(row))
        return grouped

    @staticmethod
    def _room_from_row(row: sqlite3.Row, bookings: List[Booking]) -> Room:
        return Room(id=row["id"], name=row["name"], bookings={b.id: b for b in bookings})

    # ------------------------------------
    # Room CRUD
    # ------------------------------------
    def create_room(self, room_id: str, name: Optional[str] = None) -> Room:
        logger.info(f"Creating room: {room_id}")
        room = Room(id=room_id, name=name)
        try:
            with closing(self._conn()) as conn, conn:
                conn.execute(
                    "INSERT INTO rooms (id, name) VALUES (?, ?)",
                    (room.id, room.name),
                )
        except sqlite3.IntegrityError as e:
            logger.warning(f"Room already exists: {room_id}")
            raise DatabaseError(f"Room already exists: {room_id}") from e
        except sqlite3.Error as e:
            raise DatabaseError(f"Room could not be created: {e}") from e
        return room

    def find_by_id(self, room_id: str) -> Optional[Room]:
        try:
            with closing(self._conn()) as conn:
                row = conn.execute("SELECT * FROM rooms WHERE id = ?", (room_id,)).fetchone()
                if row is None:
                    return None
                bookings = self._load_bookings(conn, [room_id])[room_id]
                return self._room_from_row(row, bookings)
        except sqlite3.Error as e:
            logger.error(f"Error loading room {room_id}: {e}")
            raise DatabaseError(f"Room {room_id} could not be loaded: {e}") from e

    def find_all(self) -> List[Room]:
        try:
            with closing(self._conn()) as conn:
                rows = conn.execute("SELECT * FROM rooms ORDER BY seq ASC").fetchall()
                grouped = self._load_bookings(conn, [r["id"] for r in rows])
                return [self._room_from_row(r, grouped[r["id"]]) for r in rows]
        except sqlite3.Error as e:
            logger.error(f"Error listing rooms: {e}")
            raise DatabaseError(f"Rooms could not be listed: {e}") from e

    def save(self, room: Room) -> None:
        """Upserts the room and replaces its booking rows in one transaction."""
        logger.info(f"Saving room {room.id} with {len(room.bookings)} bookings")
        rows: List[Dict[str, Any]] = [
            {
                "id": b.id,
                "room_id": room.id,
                "start_time": b.start.isoformat(),
                "end_time": b.end.isoformat(),
            }
            for b in room.bookings.values()
        ]
        try:
            with closing(self._conn()) as conn, conn:
                conn.execute(
                    """
                    INSERT INTO rooms (id, name) VALUES (?, ?)
                    ON CONFLICT(id) DO UPDATE SET name = excluded.name
                    """,
                    (room.id, room.name),
                )
                conn.execute("DELETE FROM bookings WHERE room_id = ?", (room.id,))
                conn.executemany(
                    """
                    INSERT INTO bookings (id, room_id, start_time, end_time)
                    VALUES (:id, :room_id, :start_time, :end_time)
                    """,
                    rows,
                )
        except sqlite3.Error as e:
            logger.error(f"Error saving room {room.id}: {e}")
            raise DatabaseError(f"Room {room.id} could not be saved: {e}") from e

