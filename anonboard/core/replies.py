"""
AnonBoard Reply Service

Creates, redacts and reports replies.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from ..db.replies import ReplyRepository
from ..db.threads import ThreadRepository
from ..errors import IncorrectCredentialError, NotFoundError
from .threads import validate_post

if TYPE_CHECKING:
    from .board import MessageBoard
    from .threads import ThreadService

logger = logging.getLogger(__name__)


class ReplyService:
    """
    Reply operations for a message board.

    Replies are never removed. Deleting one replaces its text with the
    redaction marker and keeps the record and its id.
    """

    def __init__(self, app: "MessageBoard", threads: "ThreadService"):
        self.app = app
        self.crypto = app.crypto
        self.threads = threads
        self.settings = app.config.board
        self.thread_repo = ThreadRepository(app.db)
        self.reply_repo = ReplyRepository(app.db)

    async def create_reply(self, thread_id: str, text: str, password: str) -> str:
        """
        Reply to a thread and bump it. Returns the new reply id.

        The reply row is written first, then the thread's reference list
        and bumped_on. If the thread vanishes in between, the reply is
        left orphaned and NotFoundError is raised.
        """
        validate_post(text, password, self.settings.max_text_length)

        thread = await asyncio.to_thread(self.thread_repo.get_thread_by_id, thread_id)
        if not thread:
            raise NotFoundError(f"thread {thread_id} not found")

        digest = await self.crypto.hash_password_async(password)
        reply = await asyncio.to_thread(self.reply_repo.create_reply, text, digest)

        linked = await asyncio.to_thread(
            self.thread_repo.add_reply, thread.id, reply.id, reply.created_on_us
        )
        if not linked:
            raise NotFoundError(f"thread {thread_id} not found")

        logger.info(f"Reply {reply.id} added to thread {thread.id}")
        return reply.id

    async def get_thread_with_replies(self, thread_id: str) -> dict:
        """Get a thread with all of its replies."""
        return await self.threads.get_full(thread_id)

    async def redact(self, thread_id: str, reply_id: str, password: str):
        """
        Replace a reply's text with the redaction marker.

        The password is checked against the reply's own digest. The
        thread is looked up for context only; a missing thread does not
        stop the redaction.
        """
        thread, reply = await asyncio.gather(
            asyncio.to_thread(self.thread_repo.get_thread_by_id, thread_id),
            asyncio.to_thread(self.reply_repo.get_credential, reply_id),
        )

        if reply is None:
            raise NotFoundError(f"reply {reply_id} not found")

        if thread is None:
            logger.debug(f"Redacting reply {reply_id}: thread {thread_id} not found")
        elif reply_id not in thread.reply_ids:
            logger.debug(f"Redacting reply {reply_id}: not listed on thread {thread_id}")

        if not await self.crypto.verify_password_async(password, reply.delete_password):
            logger.warning(f"Rejected delete for reply {reply_id}: incorrect password")
            raise IncorrectCredentialError()

        await asyncio.to_thread(
            self.reply_repo.update_text, reply_id, self.settings.redaction_marker
        )
        logger.info(f"Reply {reply_id} redacted")

    async def report(self, reply_id: str):
        """Flag a reply for moderator review. Repeat reports are no-ops."""
        if not await asyncio.to_thread(self.reply_repo.mark_reported, reply_id):
            raise NotFoundError(f"reply {reply_id} not found")

        logger.info(f"Reply {reply_id} reported")
