"""AnonBoard Core Module - Main board class, hashing, and services."""

from .board import MessageBoard
from .boards import BoardRegistry
from .crypto import CryptoManager
from .maintenance import MaintenanceManager
from .replies import ReplyService
from .threads import ThreadService

__all__ = [
    "MessageBoard",
    "BoardRegistry",
    "CryptoManager",
    "MaintenanceManager",
    "ReplyService",
    "ThreadService",
]
