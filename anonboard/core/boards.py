"""
AnonBoard Board Registry

Resolves board names to stored boards, creating them on first reference.
"""

import asyncio
import logging

from ..db.boards import BoardRepository
from ..db.connection import Database
from ..db.models import Board
from ..errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class BoardRegistry:
    """
    Name -> Board lookup with lazy creation.

    Boards are never deleted. Creation goes through a unique-key
    insert-or-ignore, so two requests racing on a new name end up with
    the same board.
    """

    def __init__(self, db: Database):
        self.board_repo = BoardRepository(db)

    async def resolve(self, name: str) -> Board:
        """Get the board called ``name``, creating it if absent."""
        if not name:
            raise ValidationError("board name is required")

        board, created = await asyncio.to_thread(self.board_repo.get_or_create_board, name)
        if created:
            logger.info(f"Board created: {name}")
        return board

    async def add_thread(self, board: Board, thread_id: str):
        """Append a thread reference to the board."""
        if not await asyncio.to_thread(self.board_repo.add_thread, board.id, thread_id):
            raise NotFoundError(f"thread {thread_id} not found")
