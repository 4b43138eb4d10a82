"""
AnonBoard Reply Database Operations

Replies are never hard-deleted; deletion overwrites their text.
"""

import time
import uuid
import logging
from typing import Optional

from .connection import Database
from .models import Reply

logger = logging.getLogger(__name__)


class ReplyRepository:
    """Repository for reply-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_reply(self, text: str, delete_password: str) -> Reply:
        """Create a new reply (not yet linked to a thread)."""
        now_us = int(time.time() * 1_000_000)
        reply_id = uuid.uuid4().hex

        self.db.execute("""
            INSERT INTO replies (id, text, created_on_us, delete_password, reported)
            VALUES (?, ?, ?, ?, 0)
        """, (reply_id, text, now_us, delete_password))

        return Reply(
            id=reply_id,
            text=text,
            created_on_us=now_us,
            delete_password=delete_password,
            reported=False
        )

    def get_reply_by_id(self, reply_id: str) -> Optional[Reply]:
        """Get reply by ID."""
        row = self.db.fetchone(
            "SELECT * FROM replies WHERE id = ?",
            (reply_id,)
        )
        return self._row_to_reply(row) if row else None

    def get_credential(self, reply_id: str) -> Optional[Reply]:
        """Get only the password digest and text of a reply."""
        row = self.db.fetchone(
            "SELECT id, text, delete_password FROM replies WHERE id = ?",
            (reply_id,)
        )
        if not row:
            return None

        return Reply(
            id=row["id"],
            text=row["text"],
            delete_password=row["delete_password"]
        )

    def get_thread_replies(self, thread_id: str) -> list[Reply]:
        """Get all replies of a thread in creation order."""
        rows = self.db.fetchall("""
            SELECT r.* FROM replies r
            JOIN thread_replies tr ON tr.reply_id = r.id
            WHERE tr.thread_id = ?
            ORDER BY tr.position
        """, (thread_id,))
        return [self._row_to_reply(row) for row in rows]

    def update_text(self, reply_id: str, text: str) -> bool:
        """Overwrite a reply's text."""
        cursor = self.db.execute(
            "UPDATE replies SET text = ? WHERE id = ?",
            (text, reply_id)
        )
        return cursor.rowcount > 0

    def mark_reported(self, reply_id: str) -> bool:
        """Flag a reply for moderator review."""
        cursor = self.db.execute(
            "UPDATE replies SET reported = 1 WHERE id = ?",
            (reply_id,)
        )
        return cursor.rowcount > 0

    def get_reported_replies(self) -> list[Reply]:
        """Get all reported replies, oldest first."""
        rows = self.db.fetchall(
            "SELECT * FROM replies WHERE reported = 1 ORDER BY created_on_us"
        )
        return [self._row_to_reply(row) for row in rows]

    def _row_to_reply(self, row) -> Reply:
        """Convert database row to Reply object."""
        return Reply(
            id=row["id"],
            text=row["text"],
            created_on_us=row["created_on_us"],
            delete_password=row["delete_password"],
            reported=bool(row["reported"])
        )
