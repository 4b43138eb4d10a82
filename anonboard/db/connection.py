"""
AnonBoard Database Connection Manager

SQLite database with WAL mode for concurrent reads.
"""

import sqlite3
import logging
import threading
import time
from pathlib import Path
from contextlib import contextmanager
from typing import Optional, Generator

from ..errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# Raised for the statement or its parameters, not for the store itself
_CALLER_ERRORS = (sqlite3.ProgrammingError, sqlite3.IntegrityError, sqlite3.DataError)


class Database:
    """
    SQLite database manager for AnonBoard.

    One connection is shared by every worker thread. Statements are
    serialized through a re-entrant lock so each one runs atomically;
    callers never hold the lock across an await.
    """

    def __init__(self, path: str):
        """
        Initialize database connection.

        Args:
            path: Path to SQLite database file (":memory:" for tests)
        """
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()
        self._initialized = False

    def initialize(self):
        """Initialize database connection and schema."""
        in_memory = str(self.path) == ":memory:"
        if not in_memory:
            self.path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._conn = sqlite3.connect(
                str(self.path),
                check_same_thread=False,
                isolation_level=None  # Autocommit mode
            )

            if not in_memory:
                self._conn.execute("PRAGMA journal_mode=WAL")

            # Link tables cascade on thread deletion
            self._conn.execute("PRAGMA foreign_keys=ON")

            self._conn.row_factory = sqlite3.Row

            self._run_migrations()
        except sqlite3.Error as e:
            logger.error(f"Database initialization failed: {e}")
            raise StoreUnavailableError(f"cannot open database {self.path}") from e

        self._initialized = True
        logger.info(f"Database initialized: {self.path}")

    def _run_migrations(self):
        """Run database migrations."""
        self._conn.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                applied_at INTEGER NOT NULL
            )
        """)

        applied = {
            row[0] for row in
            self._conn.execute("SELECT name FROM _migrations").fetchall()
        }

        migrations = [
            ("001_initial", self._migration_001_initial),
        ]

        for name, func in migrations:
            if name not in applied:
                logger.info(f"Running migration: {name}")
                func()
                self._conn.execute(
                    "INSERT INTO _migrations (name, applied_at) VALUES (?, ?)",
                    (name, int(time.time() * 1_000_000))
                )

    def _migration_001_initial(self):
        """Initial database schema."""
        self._conn.executescript("""
            -- Boards table
            CREATE TABLE IF NOT EXISTS boards (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                name            TEXT UNIQUE NOT NULL,
                created_on_us   INTEGER NOT NULL
            );

            -- Threads table
            CREATE TABLE IF NOT EXISTS threads (
                id              TEXT PRIMARY KEY,
                text            TEXT NOT NULL,
                created_on_us   INTEGER NOT NULL,
                bumped_on_us    INTEGER NOT NULL,
                delete_password TEXT NOT NULL,
                reported        INTEGER DEFAULT 0
            );
            CREATE INDEX IF NOT EXISTS idx_threads_bumped ON threads(bumped_on_us);

            -- Replies table
            CREATE TABLE IF NOT EXISTS replies (
                id              TEXT PRIMARY KEY,
                text            TEXT NOT NULL,
                created_on_us   INTEGER NOT NULL,
                delete_password TEXT NOT NULL,
                reported        INTEGER DEFAULT 0
            );

            -- Board -> thread references, in insertion order
            CREATE TABLE IF NOT EXISTS board_threads (
                board_id        INTEGER NOT NULL REFERENCES boards(id),
                thread_id       TEXT NOT NULL REFERENCES threads(id) ON DELETE CASCADE,
                position        INTEGER NOT NULL,
                PRIMARY KEY (board_id, thread_id)
            );
            CREATE INDEX IF NOT EXISTS idx_board_threads_thread ON board_threads(thread_id);

            -- Thread -> reply references, in insertion order.
            -- Deleting a thread drops these rows but not the replies.
            CREATE TABLE IF NOT EXISTS thread_replies (
                thread_id       TEXT NOT NULL REFERENCES threads(id) ON DELETE CASCADE,
                reply_id        TEXT NOT NULL REFERENCES replies(id),
                position        INTEGER NOT NULL,
                PRIMARY KEY (thread_id, reply_id)
            );
            CREATE INDEX IF NOT EXISTS idx_thread_replies_reply ON thread_replies(reply_id);
        """)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreUnavailableError("database is not open")
        return self._conn

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database transactions."""
        with self._lock:
            conn = self._connection()
            try:
                conn.execute("BEGIN")
            except sqlite3.OperationalError as e:
                raise StoreUnavailableError(str(e)) from e
            try:
                yield conn
                conn.execute("COMMIT")
            except Exception:
                conn.execute("ROLLBACK")
                raise

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute SQL query."""
        with self._lock:
            try:
                return self._connection().execute(sql, params)
            except _CALLER_ERRORS:
                raise
            except sqlite3.DatabaseError as e:
                logger.error(f"Database error: {e}")
                raise StoreUnavailableError(str(e)) from e

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        """Execute query and fetch one result."""
        with self._lock:
            return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute query and fetch all results."""
        with self._lock:
            return self.execute(sql, params).fetchall()

    def close(self):
        """Close database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("Database connection closed")

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    # === Utility Methods ===

    def count_boards(self) -> int:
        """Count boards."""
        row = self.fetchone("SELECT COUNT(*) FROM boards")
        return row[0] if row else 0

    def count_threads(self) -> int:
        """Count stored threads."""
        row = self.fetchone("SELECT COUNT(*) FROM threads")
        return row[0] if row else 0

    def count_replies(self) -> int:
        """Count stored replies, including orphans."""
        row = self.fetchone("SELECT COUNT(*) FROM replies")
        return row[0] if row else 0
