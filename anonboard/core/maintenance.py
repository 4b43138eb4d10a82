"""
AnonBoard Maintenance Module

Moderator and operator tasks:
- Listing reported threads and replies
- Orphan detection and explicit purge
- Statistics collection
"""

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from ..db.replies import ReplyRepository
from ..db.threads import ThreadRepository
from ..utils.formatting import format_timestamp

if TYPE_CHECKING:
    from .board import MessageBoard

logger = logging.getLogger(__name__)

# Records younger than this may still be waiting for their parent link
DEFAULT_ORPHAN_GRACE_SECONDS = 3600

_ORPHAN_THREADS_SQL = """
    FROM threads
    WHERE id NOT IN (SELECT thread_id FROM board_threads)
      AND created_on_us < ?
"""

_ORPHAN_REPLIES_SQL = """
    FROM replies
    WHERE id NOT IN (SELECT reply_id FROM thread_replies)
      AND created_on_us < ?
"""


class MaintenanceManager:
    """
    Maintenance tasks for AnonBoard.

    Nothing here runs on its own. Orphans (replies of a deleted thread,
    or records whose parent link was never written) are kept until an
    operator purges them.
    """

    def __init__(self, app: "MessageBoard"):
        self.app = app
        self.db = app.db
        self.thread_repo = ThreadRepository(app.db)
        self.reply_repo = ReplyRepository(app.db)

    def list_reported(self) -> dict:
        """
        List reported content for moderator review.

        Returns dict with "threads" and "replies", each a list of
        {id, text, created_on}.
        """
        threads = self.thread_repo.get_reported_threads()
        replies = self.reply_repo.get_reported_replies()

        return {
            "threads": [
                {"id": t.id, "text": t.text, "created_on": format_timestamp(t.created_on_us)}
                for t in threads
            ],
            "replies": [
                {"id": r.id, "text": r.text, "created_on": format_timestamp(r.created_on_us)}
                for r in replies
            ],
        }

    def find_orphans(self, grace_seconds: int = DEFAULT_ORPHAN_GRACE_SECONDS) -> dict:
        """Count threads no board lists and replies no thread lists."""
        cutoff_us = self._cutoff_us(grace_seconds)

        threads = self.db.fetchone("SELECT COUNT(*) " + _ORPHAN_THREADS_SQL, (cutoff_us,))
        replies = self.db.fetchone("SELECT COUNT(*) " + _ORPHAN_REPLIES_SQL, (cutoff_us,))

        return {
            "threads": threads[0] if threads else 0,
            "replies": replies[0] if replies else 0,
        }

    async def purge_orphans(self, grace_seconds: int = DEFAULT_ORPHAN_GRACE_SECONDS) -> dict:
        """
        Delete orphaned threads and replies.

        Threads go first so the replies they held become orphans in the
        same pass.

        Returns dict with counts of deleted threads and replies.
        """
        return await asyncio.to_thread(self._purge_orphans, grace_seconds)

    def _purge_orphans(self, grace_seconds: int) -> dict:
        cutoff_us = self._cutoff_us(grace_seconds)
        result = {"threads": 0, "replies": 0}

        with self.db.transaction():
            cursor = self.db.execute("DELETE " + _ORPHAN_THREADS_SQL, (cutoff_us,))
            result["threads"] = cursor.rowcount

            cursor = self.db.execute("DELETE " + _ORPHAN_REPLIES_SQL, (cutoff_us,))
            result["replies"] = cursor.rowcount

        logger.info(
            f"Orphan purge complete: {result['threads']} threads, "
            f"{result['replies']} replies"
        )
        return result

    def get_stats(self) -> dict:
        """
        Get board statistics.

        Returns dict with counts and status info.
        """
        reported_threads = self.db.fetchone("SELECT COUNT(*) FROM threads WHERE reported = 1")
        reported_replies = self.db.fetchone("SELECT COUNT(*) FROM replies WHERE reported = 1")

        return {
            "name": self.app.config.board.name,
            "boards": self.db.count_boards(),
            "threads": self.db.count_threads(),
            "replies": self.db.count_replies(),
            "reported_threads": reported_threads[0] if reported_threads else 0,
            "reported_replies": reported_replies[0] if reported_replies else 0,
        }

    @staticmethod
    def _cutoff_us(grace_seconds: int) -> int:
        # +1 so a grace of 0 includes records created this microsecond
        return int((time.time() - grace_seconds) * 1_000_000) + 1
