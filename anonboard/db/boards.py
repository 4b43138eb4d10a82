"""
AnonBoard Board Database Operations

Boards and their ordered thread references.
"""

import time
import sqlite3
import logging
from typing import Optional

from .connection import Database
from .models import Board

logger = logging.getLogger(__name__)


class BoardRepository:
    """Repository for board-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def get_board_by_name(self, name: str) -> Optional[Board]:
        """Get board by exact name."""
        row = self.db.fetchone(
            "SELECT * FROM boards WHERE name = ?",
            (name,)
        )
        return self._row_to_board(row) if row else None

    def get_or_create_board(self, name: str) -> tuple[Board, bool]:
        """
        Get existing board or create new one.

        The insert relies on the UNIQUE(name) constraint, so concurrent
        first references to a name converge on a single row.

        Returns:
            (Board, created) where created is True if this call inserted it
        """
        now_us = int(time.time() * 1_000_000)

        cursor = self.db.execute(
            "INSERT OR IGNORE INTO boards (name, created_on_us) VALUES (?, ?)",
            (name, now_us)
        )
        created = cursor.rowcount == 1

        board = self.get_board_by_name(name)
        return board, created

    def add_thread(self, board_id: int, thread_id: str) -> bool:
        """
        Append a thread reference to the board's thread list.

        Returns False if the thread no longer exists.
        """
        try:
            self.db.execute("""
                INSERT INTO board_threads (board_id, thread_id, position)
                SELECT ?, ?, COALESCE(MAX(position), -1) + 1
                FROM board_threads WHERE board_id = ?
            """, (board_id, thread_id, board_id))
        except sqlite3.IntegrityError:
            logger.warning(f"Thread {thread_id} vanished before it was linked")
            return False
        return True

    def get_thread_ids(self, board_id: int) -> list[str]:
        """Get the board's thread references in insertion order."""
        rows = self.db.fetchall(
            "SELECT thread_id FROM board_threads WHERE board_id = ? ORDER BY position",
            (board_id,)
        )
        return [row["thread_id"] for row in rows]

    def _row_to_board(self, row) -> Board:
        """Convert database row to Board object."""
        return Board(
            id=row["id"],
            name=row["name"],
            created_on_us=row["created_on_us"],
            thread_ids=self.get_thread_ids(row["id"])
        )
