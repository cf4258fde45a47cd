"""SQLite backing file for the PulseGuard record store.

Opens the connection, applies schema migrations in order, and refuses files
written by a newer release.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

# Version -> DDL that brings a file from the previous version to this one
_MIGRATIONS: dict[int, str] = {
    1: """
        -- Latest submitted record; the CHECK keeps it to one row
        CREATE TABLE IF NOT EXISTS current_record (
            slot        INTEGER PRIMARY KEY CHECK (slot = 1),
            record_enc  TEXT NOT NULL,
            updated_at  TEXT NOT NULL
        );

        -- Submission history, ordered by (recorded_at, seq) and trimmed by the repository
        CREATE TABLE IF NOT EXISTS progress_entries (
            seq         INTEGER PRIMARY KEY AUTOINCREMENT,
            id          TEXT NOT NULL UNIQUE,
            recorded_at TEXT NOT NULL,
            record_enc  TEXT NOT NULL,
            created_at  TEXT NOT NULL DEFAULT (datetime('now'))
        );

        CREATE INDEX IF NOT EXISTS idx_progress_recorded_at
            ON progress_entries(recorded_at);
    """,
}

SCHEMA_VERSION = max(_MIGRATIONS)

_VERSION_TABLE = """
CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


class DatabaseError(Exception):
    """Raised when the database is unusable: not opened, or from a newer release."""


def _connect(db_path: str) -> sqlite3.Connection:
    if db_path == MEMORY_PATH:
        return sqlite3.connect(MEMORY_PATH)
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(str(path))


class HealthDatabase:
    """Owns one SQLite connection for the record store.

    ``db_path`` is a file path (``~`` is expanded, parent directories are
    created) or ``":memory:"``.

    Usage::

        with HealthDatabase("~/.pulseguard/health.db") as db:
            repo = HealthRepository(db, cipher)
    """

    def __init__(self, db_path: str = MEMORY_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> str:
        return self._db_path

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DatabaseError(
                f"Database {self._db_path!r} not initialized; call initialize() first"
            )
        return self._conn

    def initialize(self) -> None:
        """Open the file and migrate it to :data:`SCHEMA_VERSION`. No-op if open."""
        if self._conn is not None:
            return
        conn = _connect(self._db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        self._conn = conn
        self._migrate()
        logger.info("Record database ready: %s (schema v%d)", self._db_path, SCHEMA_VERSION)

    def _migrate(self) -> None:
        conn = self.connection
        conn.executescript(_VERSION_TABLE)
        found = self.get_schema_version()
        if found > SCHEMA_VERSION:
            raise DatabaseError(
                f"{self._db_path} uses schema v{found}, which is newer than supported "
                f"v{SCHEMA_VERSION}; upgrade PulseGuard to open it"
            )
        for version in sorted(v for v in _MIGRATIONS if v > found):
            conn.executescript(_MIGRATIONS[version])
            conn.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))
            conn.commit()
            logger.info("Applied schema migration v%d to %s", version, self._db_path)

    def get_schema_version(self) -> int:
        """Highest applied migration, 0 for a fresh file."""
        (version,) = self.connection.execute(
            "SELECT COALESCE(MAX(version), 0) FROM schema_version"
        ).fetchone()
        return version

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug("Record database closed: %s", self._db_path)

    def __enter__(self) -> HealthDatabase:
        self.initialize()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
