"""
Tests for AnonBoard Maintenance Module

Tests reported-content listing, orphan handling and statistics.
"""

import pytest

from anonboard.config import Config, BoardConfig, CryptoConfig, DatabaseConfig
from anonboard.core.board import MessageBoard
from anonboard.core.maintenance import MaintenanceManager
from anonboard.db.threads import ThreadRepository


def make_board() -> MessageBoard:
    config = Config()
    config.board = BoardConfig(name="TestBoard")
    config.database = DatabaseConfig(path=":memory:")
    config.crypto = CryptoConfig(argon2_time_cost=1, argon2_memory_kb=8192, argon2_parallelism=1)
    board = MessageBoard(config)
    board.setup()
    return board


class TestReported:
    """Tests for the moderator report listing."""

    def setup_method(self):
        self.board = make_board()
        self.maintenance = MaintenanceManager(self.board)

    def teardown_method(self):
        self.board.shutdown()

    def test_nothing_reported(self):
        assert self.maintenance.list_reported() == {"threads": [], "replies": []}

    @pytest.mark.asyncio
    async def test_list_reported(self):
        """Reported threads and replies are listed without privileged fields."""
        thread_id = await self.board.create_thread("general", "bad thread", "p1")
        await self.board.create_thread("general", "fine thread", "p1")
        reply_id = await self.board.create_reply(thread_id, "bad reply", "p2")

        await self.board.report_thread(thread_id)
        await self.board.report_reply(reply_id)

        reported = self.maintenance.list_reported()

        assert [t["id"] for t in reported["threads"]] == [thread_id]
        assert [r["id"] for r in reported["replies"]] == [reply_id]
        assert reported["replies"][0]["text"] == "bad reply"
        assert set(reported["threads"][0]) == {"id", "text", "created_on"}


class TestOrphans:
    """Tests for orphan detection and purge."""

    def setup_method(self):
        self.board = make_board()
        self.maintenance = MaintenanceManager(self.board)

    def teardown_method(self):
        self.board.shutdown()

    @pytest.mark.asyncio
    async def test_no_orphans(self):
        thread_id = await self.board.create_thread("general", "hello", "p1")
        await self.board.create_reply(thread_id, "hi", "p2")

        assert self.maintenance.find_orphans(grace_seconds=0) == {"threads": 0, "replies": 0}

    @pytest.mark.asyncio
    async def test_deleted_thread_orphans_replies(self):
        """Replies of a deleted thread are orphans until purged."""
        thread_id = await self.board.create_thread("general", "hello", "p1")
        await self.board.create_reply(thread_id, "hi", "p2")
        await self.board.create_reply(thread_id, "there", "p2")
        keep_id = await self.board.create_thread("general", "keep", "p1")
        await self.board.create_reply(keep_id, "kept reply", "p2")

        await self.board.delete_thread(thread_id, "p1")

        assert self.maintenance.find_orphans(grace_seconds=0) == {"threads": 0, "replies": 2}

        purged = await self.maintenance.purge_orphans(grace_seconds=0)

        assert purged == {"threads": 0, "replies": 2}
        assert self.board.db.count_replies() == 1
        view = await self.board.get_thread(keep_id)
        assert [r["text"] for r in view["replies"]] == ["kept reply"]

    @pytest.mark.asyncio
    async def test_unlinked_thread_purged_with_replies(self):
        """A thread whose board link was never written is purged with its replies."""
        thread_repo = ThreadRepository(self.board.db)
        orphan = thread_repo.create_thread("lost", "digest")
        await self.board.create_reply(orphan.id, "lost reply", "p2")

        assert self.maintenance.find_orphans(grace_seconds=0) == {"threads": 1, "replies": 0}

        purged = await self.maintenance.purge_orphans(grace_seconds=0)

        assert purged == {"threads": 1, "replies": 1}
        assert self.board.db.count_threads() == 0
        assert self.board.db.count_replies() == 0

    @pytest.mark.asyncio
    async def test_grace_period_skips_recent(self):
        """Fresh orphans are left alone inside the grace period."""
        thread_id = await self.board.create_thread("general", "hello", "p1")
        await self.board.create_reply(thread_id, "hi", "p2")
        await self.board.delete_thread(thread_id, "p1")

        purged = await self.maintenance.purge_orphans()

        assert purged == {"threads": 0, "replies": 0}
        assert self.board.db.count_replies() == 1


class TestStats:
    """Tests for statistics."""

    def setup_method(self):
        self.board = make_board()
        self.maintenance = MaintenanceManager(self.board)

    def teardown_method(self):
        self.board.shutdown()

    @pytest.mark.asyncio
    async def test_get_stats(self):
        thread_id = await self.board.create_thread("general", "hello", "p1")
        await self.board.create_thread("news", "news", "p1")
        reply_id = await self.board.create_reply(thread_id, "hi", "p2")
        await self.board.report_reply(reply_id)

        stats = self.maintenance.get_stats()

        assert stats["name"] == "TestBoard"
        assert stats["boards"] == 2
        assert stats["threads"] == 2
        assert stats["replies"] == 1
        assert stats["reported_threads"] == 0
        assert stats["reported_replies"] == 1
