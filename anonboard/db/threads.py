"""
AnonBoard Thread Database Operations

CRUD operations for threads and their ordered reply references.
"""

import time
import uuid
import logging
from typing import Optional

from .connection import Database
from .models import Thread

logger = logging.getLogger(__name__)


class ThreadRepository:
    """Repository for thread-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_thread(self, text: str, delete_password: str) -> Thread:
        """Create a new thread. bumped_on starts equal to created_on."""
        now_us = int(time.time() * 1_000_000)
        thread_id = uuid.uuid4().hex

        self.db.execute("""
            INSERT INTO threads (id, text, created_on_us, bumped_on_us, delete_password, reported)
            VALUES (?, ?, ?, ?, ?, 0)
        """, (thread_id, text, now_us, now_us, delete_password))

        return Thread(
            id=thread_id,
            text=text,
            created_on_us=now_us,
            bumped_on_us=now_us,
            delete_password=delete_password,
            reported=False
        )

    def get_thread_by_id(self, thread_id: str) -> Optional[Thread]:
        """Get thread by ID, including its reply references."""
        row = self.db.fetchone(
            "SELECT * FROM threads WHERE id = ?",
            (thread_id,)
        )
        return self._row_to_thread(row) if row else None

    def get_delete_password(self, thread_id: str) -> Optional[str]:
        """Get only the stored password digest of a thread."""
        row = self.db.fetchone(
            "SELECT delete_password FROM threads WHERE id = ?",
            (thread_id,)
        )
        return row["delete_password"] if row else None

    def get_board_threads(self, board_id: int, limit: int = 10) -> list[Thread]:
        """
        Get a board's most recently bumped threads.

        Ties on bumped_on keep the order the threads were added to the board.
        """
        rows = self.db.fetchall("""
            SELECT t.* FROM threads t
            JOIN board_threads bt ON bt.thread_id = t.id
            WHERE bt.board_id = ?
            ORDER BY t.bumped_on_us DESC, bt.position ASC
            LIMIT ?
        """, (board_id, limit))
        return [self._row_to_thread(row) for row in rows]

    def add_reply(self, thread_id: str, reply_id: str, bumped_on_us: int) -> bool:
        """
        Append a reply reference and bump the thread.

        Returns False if the thread no longer exists.
        """
        with self.db.transaction():
            cursor = self.db.execute(
                "UPDATE threads SET bumped_on_us = ? WHERE id = ?",
                (bumped_on_us, thread_id)
            )
            if cursor.rowcount == 0:
                return False

            self.db.execute("""
                INSERT INTO thread_replies (thread_id, reply_id, position)
                SELECT ?, ?, COALESCE(MAX(position), -1) + 1
                FROM thread_replies WHERE thread_id = ?
            """, (thread_id, reply_id, thread_id))

        return True

    def get_reply_ids(self, thread_id: str) -> list[str]:
        """Get the thread's reply references in insertion order."""
        rows = self.db.fetchall(
            "SELECT reply_id FROM thread_replies WHERE thread_id = ? ORDER BY position",
            (thread_id,)
        )
        return [row["reply_id"] for row in rows]

    def mark_reported(self, thread_id: str) -> bool:
        """Flag a thread for moderator review."""
        cursor = self.db.execute(
            "UPDATE threads SET reported = 1 WHERE id = ?",
            (thread_id,)
        )
        return cursor.rowcount > 0

    def delete_thread(self, thread_id: str) -> bool:
        """Delete a thread. Its replies are left in place."""
        cursor = self.db.execute("DELETE FROM threads WHERE id = ?", (thread_id,))
        return cursor.rowcount > 0

    def get_reported_threads(self) -> list[Thread]:
        """Get all reported threads, oldest first."""
        rows = self.db.fetchall(
            "SELECT * FROM threads WHERE reported = 1 ORDER BY created_on_us"
        )
        return [self._row_to_thread(row) for row in rows]

    def _row_to_thread(self, row) -> Thread:
        """Convert database row to Thread object."""
        return Thread(
            id=row["id"],
            text=row["text"],
            created_on_us=row["created_on_us"],
            bumped_on_us=row["bumped_on_us"],
            delete_password=row["delete_password"],
            reported=bool(row["reported"]),
            reply_ids=self.get_reply_ids(row["id"])
        )
