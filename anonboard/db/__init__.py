"""AnonBoard Database Module - SQLite storage and repositories."""

from .connection import Database
from .models import Board, Thread, Reply
from .boards import BoardRepository
from .threads import ThreadRepository
from .replies import ReplyRepository

__all__ = [
    "Database",
    "Board",
    "Thread",
    "Reply",
    "BoardRepository",
    "ThreadRepository",
    "ReplyRepository",
]
