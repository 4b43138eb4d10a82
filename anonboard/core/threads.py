"""
AnonBoard Thread Service

Creates, lists, reads, deletes and reports threads.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from ..db.replies import ReplyRepository
from ..db.threads import ThreadRepository
from ..errors import IncorrectCredentialError, NotFoundError, ValidationError
from .views import thread_detail_view, thread_list_view

if TYPE_CHECKING:
    from .board import MessageBoard

logger = logging.getLogger(__name__)


def check_string(value, name: str):
    """Reject a field that is not a UTF-8 encodable string."""
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(f"{name} is not valid text") from None


def validate_post(text: str, password: str, max_length: int):
    """Reject a thread or reply before anything is written."""
    check_string(text, "text")
    check_string(password, "delete_password")
    if not text or not text.strip():
        raise ValidationError("text is required")
    if len(text) > max_length:
        raise ValidationError(f"text too long (max {max_length} chars)")
    if not password:
        raise ValidationError("delete_password is required")


class ThreadService:
    """
    Thread operations for a message board.

    Creating a thread is two writes, the thread row then the board's
    reference to it, issued in that order and not wrapped in a
    transaction. A failure in between leaves a thread no board lists.
    """

    def __init__(self, app: "MessageBoard"):
        self.app = app
        self.crypto = app.crypto
        self.registry = app.registry
        self.settings = app.config.board
        self.thread_repo = ThreadRepository(app.db)
        self.reply_repo = ReplyRepository(app.db)

    async def create_thread(self, board_name: str, text: str, password: str) -> str:
        """Create a thread on a board. Returns the new thread id."""
        validate_post(text, password, self.settings.max_text_length)

        board = await self.registry.resolve(board_name)
        digest = await self.crypto.hash_password_async(password)

        thread = await asyncio.to_thread(self.thread_repo.create_thread, text, digest)
        await self.registry.add_thread(board, thread.id)

        logger.info(f"Thread {thread.id} created on {board.name}")
        return thread.id

    async def list_recent(self, board_name: str) -> list[dict]:
        """
        List a board's most recently bumped threads.

        At most ``list_limit`` threads, newest bump first, each with a
        reply count and a preview of its last few replies.
        """
        board = await self.registry.resolve(board_name)
        threads = await asyncio.to_thread(
            self.thread_repo.get_board_threads, board.id, self.settings.list_limit
        )

        result = []
        for thread in threads:
            replies = await asyncio.to_thread(self.reply_repo.get_thread_replies, thread.id)
            result.append(thread_list_view(thread, replies, self.settings.preview_replies))
        return result

    async def get_full(self, thread_id: str) -> dict:
        """Get a thread with all of its replies."""
        thread = await asyncio.to_thread(self.thread_repo.get_thread_by_id, thread_id)
        if not thread:
            raise NotFoundError(f"thread {thread_id} not found")

        replies = await asyncio.to_thread(self.reply_repo.get_thread_replies, thread.id)
        return thread_detail_view(thread, replies)

    async def delete(self, thread_id: str, password: str):
        """
        Hard-delete a thread if the password matches.

        The thread's replies are not deleted; they become unreachable.
        """
        digest = await asyncio.to_thread(self.thread_repo.get_delete_password, thread_id)
        if digest is None:
            raise NotFoundError(f"thread {thread_id} not found")

        if not await self.crypto.verify_password_async(password, digest):
            logger.warning(f"Rejected delete for thread {thread_id}: incorrect password")
            raise IncorrectCredentialError()

        if not await asyncio.to_thread(self.thread_repo.delete_thread, thread_id):
            raise NotFoundError(f"thread {thread_id} not found")

        logger.info(f"Thread {thread_id} deleted")

    async def report(self, thread_id: str):
        """Flag a thread for moderator review. Repeat reports are no-ops."""
        if not await asyncio.to_thread(self.thread_repo.mark_reported, thread_id):
            raise NotFoundError(f"thread {thread_id} not found")

        logger.info(f"Thread {thread_id} reported")
