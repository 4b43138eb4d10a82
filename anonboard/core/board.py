"""
AnonBoard Main Class

Central orchestrator wiring storage, hashing and the board services.
"""

import logging
from typing import Optional

from ..config import Config
from ..db.connection import Database
from .boards import BoardRegistry
from .crypto import CryptoManager
from .replies import ReplyService
from .threads import ThreadService

logger = logging.getLogger(__name__)


class MessageBoard:
    """
    Main AnonBoard class - the operations offered to a transport.

    Responsibilities:
    - Open and close the database
    - Hold the shared CryptoManager and BoardRegistry
    - Expose thread and reply operations as coroutines

    Every operation is independent; the database is the only state
    shared between them.
    """

    def __init__(self, config: Config):
        """
        Initialize AnonBoard with configuration.

        Args:
            config: Loaded configuration object
        """
        self.config = config

        self.crypto = CryptoManager(
            time_cost=config.crypto.argon2_time_cost,
            memory_cost_kb=config.crypto.argon2_memory_kb,
            parallelism=config.crypto.argon2_parallelism
        )

        # These will be initialized in setup()
        self.db: Optional[Database] = None
        self.registry: Optional[BoardRegistry] = None
        self.thread_service: Optional[ThreadService] = None
        self.reply_service: Optional[ReplyService] = None

        logger.info(f"AnonBoard initialized: {config.board.name}")

    def setup(self):
        """Open the database and build the services."""
        self.db = Database(self.config.database.path)
        self.db.initialize()

        self.registry = BoardRegistry(self.db)
        self.thread_service = ThreadService(self)
        self.reply_service = ReplyService(self, self.thread_service)

        logger.info("AnonBoard setup complete")

    def shutdown(self):
        """Close the database."""
        if self.db:
            self.db.close()
        logger.info("AnonBoard shutdown complete")

    # === Threads ===

    async def create_thread(self, board: str, text: str, password: str) -> str:
        return await self.thread_service.create_thread(board, text, password)

    async def list_threads(self, board: str) -> list[dict]:
        return await self.thread_service.list_recent(board)

    async def get_thread(self, thread_id: str) -> dict:
        return await self.thread_service.get_full(thread_id)

    async def delete_thread(self, thread_id: str, password: str):
        await self.thread_service.delete(thread_id, password)

    async def report_thread(self, thread_id: str):
        await self.thread_service.report(thread_id)

    # === Replies ===

    async def create_reply(self, thread_id: str, text: str, password: str) -> str:
        return await self.reply_service.create_reply(thread_id, text, password)

    async def get_thread_with_replies(self, thread_id: str) -> dict:
        return await self.reply_service.get_thread_with_replies(thread_id)

    async def redact_reply(self, thread_id: str, reply_id: str, password: str):
        await self.reply_service.redact(thread_id, reply_id, password)

    async def report_reply(self, reply_id: str):
        await self.reply_service.report(reply_id)
