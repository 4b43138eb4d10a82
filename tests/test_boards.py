"""
Tests for AnonBoard Board Registry
"""

import asyncio

import pytest

from anonboard.core.boards import BoardRegistry
from anonboard.db.boards import BoardRepository
from anonboard.db.connection import Database
from anonboard.db.threads import ThreadRepository
from anonboard.errors import NotFoundError, ValidationError


class TestBoardRepository:
    """Tests for board storage."""

    def setup_method(self):
        """Set up test fixtures."""
        self.db = Database(":memory:")
        self.db.initialize()
        self.repo = BoardRepository(self.db)

    def teardown_method(self):
        self.db.close()

    def test_get_missing_board(self):
        """Unknown names return None."""
        assert self.repo.get_board_by_name("nope") is None

    def test_get_or_create_board(self):
        """First call creates, second call finds."""
        board1, created1 = self.repo.get_or_create_board("general")
        board2, created2 = self.repo.get_or_create_board("general")

        assert created1 is True
        assert created2 is False
        assert board1.id == board2.id
        assert board1.thread_ids == []
        assert self.db.count_boards() == 1

    def test_names_are_exact(self):
        """Board names are not case folded."""
        lower, _ = self.repo.get_or_create_board("general")
        upper, _ = self.repo.get_or_create_board("General")

        assert lower.id != upper.id
        assert self.db.count_boards() == 2

    def test_thread_references_keep_insertion_order(self):
        """Threads are listed on the board in the order they were added."""
        board, _ = self.repo.get_or_create_board("general")
        thread_repo = ThreadRepository(self.db)

        ids = [thread_repo.create_thread(f"t{i}", "digest").id for i in range(3)]
        for thread_id in ids:
            self.repo.add_thread(board.id, thread_id)

        assert self.repo.get_board_by_name("general").thread_ids == ids

    def test_add_missing_thread(self):
        """Linking a thread that does not exist reports False."""
        board, _ = self.repo.get_or_create_board("general")

        assert self.repo.add_thread(board.id, "does-not-exist") is False
        assert self.repo.get_board_by_name("general").thread_ids == []


class TestBoardRegistry:
    """Tests for lazy board resolution."""

    def setup_method(self):
        """Set up test fixtures."""
        self.db = Database(":memory:")
        self.db.initialize()
        self.registry = BoardRegistry(self.db)

    def teardown_method(self):
        self.db.close()

    @pytest.mark.asyncio
    async def test_resolve_creates_board(self):
        """Resolving an unknown name creates the board."""
        board = await self.registry.resolve("general")

        assert board.id is not None
        assert board.name == "general"
        assert board.thread_ids == []

    @pytest.mark.asyncio
    async def test_resolve_is_idempotent(self):
        """Two sequential resolves return the same board."""
        board1 = await self.registry.resolve("general")
        board2 = await self.registry.resolve("general")

        assert board1.id == board2.id
        assert self.db.count_boards() == 1

    @pytest.mark.asyncio
    async def test_concurrent_resolve_single_board(self):
        """Racing first references still produce one board."""
        boards = await asyncio.gather(*[self.registry.resolve("race") for _ in range(10)])

        assert len({b.id for b in boards}) == 1
        assert self.db.count_boards() == 1

    @pytest.mark.asyncio
    async def test_resolve_empty_name(self):
        """Empty board names are rejected."""
        with pytest.raises(ValidationError):
            await self.registry.resolve("")

        assert self.db.count_boards() == 0

    @pytest.mark.asyncio
    async def test_add_missing_thread(self):
        """Linking a vanished thread raises NotFoundError."""
        board = await self.registry.resolve("general")

        with pytest.raises(NotFoundError):
            await self.registry.add_thread(board, "does-not-exist")
