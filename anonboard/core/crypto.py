"""
AnonBoard Cryptography Module

Hashes and verifies delete passwords with Argon2id.
"""

import asyncio
import logging

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

from ..errors import ValidationError

logger = logging.getLogger(__name__)


class CryptoManager:
    """
    One-way hashing of delete passwords.

    A digest is produced once, when a thread or reply is created, and is
    only ever verified against afterwards. Digests carry their own
    parameters, so changing the work factor does not invalidate old ones.
    """

    SALT_LENGTH = 16
    HASH_LENGTH = 32

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost_kb: int = 32768,  # 32MB
        parallelism: int = 1
    ):
        """
        Initialize crypto manager with Argon2id parameters.

        Args:
            time_cost: Number of iterations (higher = slower + more secure)
            memory_cost_kb: Memory usage in KB
            parallelism: Number of parallel threads
        """
        self.time_cost = time_cost
        self.memory_cost_kb = memory_cost_kb
        self.parallelism = parallelism

        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost_kb,
            parallelism=parallelism,
            hash_len=self.HASH_LENGTH,
            salt_len=self.SALT_LENGTH,
            type=Type.ID
        )

        logger.debug(
            f"CryptoManager initialized: time={time_cost}, "
            f"memory={memory_cost_kb}KB, parallelism={parallelism}"
        )

    def hash_password(self, password: str) -> str:
        """
        Hash a password using Argon2id.

        Returns the full Argon2 hash string including parameters and salt.
        """
        if not password:
            raise ValidationError("delete_password is required")
        return self._hasher.hash(password)

    def verify_password(self, password: str, hash_str: str) -> bool:
        """
        Verify a password against an Argon2id hash.

        Returns True if password matches, False otherwise. A malformed or
        foreign digest is a mismatch, never an error.
        """
        if not password or not hash_str:
            return False

        try:
            return self._hasher.verify(hash_str, password)
        except (VerificationError, InvalidHashError, UnicodeEncodeError):
            return False

    async def hash_password_async(self, password: str) -> str:
        """hash_password on a worker thread."""
        return await asyncio.to_thread(self.hash_password, password)

    async def verify_password_async(self, password: str, hash_str: str) -> bool:
        """verify_password on a worker thread."""
        return await asyncio.to_thread(self.verify_password, password, hash_str)
