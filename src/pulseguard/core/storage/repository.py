"""Encrypted SQLite implementation of the health store.

The repository mediates between :class:`HealthRecord` values and the
SQLite database, using :class:`RecordCipher` so that no record is written in
plaintext.
"""

from __future__ import annotations

import logging
from typing import Any

from pulseguard.core.storage.database import HealthDatabase
from pulseguard.core.storage.encryption import RecordCipher
from pulseguard.core.storage.models import ProgressEntry
from pulseguard.core.storage.store import (
    DEFAULT_HISTORY_LIMIT,
    check_history_limit,
    new_entry_id,
    now_iso,
)
from pulseguard.domains.health.domain_logic.models import HealthRecord

logger = logging.getLogger(__name__)


class HealthRepository:
    """HealthStore backed by an encrypted SQLite database.

    Usage::

        db = HealthDatabase(":memory:")
        db.initialize()
        repo = HealthRepository(db, RecordCipher(key))

        repo.set(record)
        repo.append(record)
        history = repo.history()
    """

    def __init__(
        self,
        database: HealthDatabase,
        cipher: RecordCipher,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self._db = database
        self._cipher = cipher
        self._limit = check_history_limit(history_limit)

    @property
    def history_limit(self) -> int:
        return self._limit

    # ------------------------------------------------------------------
    # Current record
    # ------------------------------------------------------------------

    def get(self) -> HealthRecord | None:
        row = self._db.connection.execute(
            "SELECT record_enc FROM current_record WHERE slot = 1"
        ).fetchone()
        if row is None:
            return None
        return self._cipher.decrypt_record(row["record_enc"])

    def set(self, record: HealthRecord) -> None:
        conn = self._db.connection
        conn.execute(
            """INSERT INTO current_record (slot, record_enc, updated_at)
               VALUES (1, ?, ?)
               ON CONFLICT(slot) DO UPDATE SET
                   record_enc = excluded.record_enc,
                   updated_at = excluded.updated_at""",
            (self._cipher.encrypt_record(record), now_iso()),
        )
        conn.commit()
        logger.info("Current health record updated")

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def append(self, record: HealthRecord, recorded_at: str | None = None) -> ProgressEntry:
        """Store a history entry and keep the ``history_limit`` latest-dated."""
        conn = self._db.connection
        entry = ProgressEntry(
            id=new_entry_id(),
            recorded_at=recorded_at or now_iso(),
            record=record,
        )
        conn.execute(
            "INSERT INTO progress_entries (id, recorded_at, record_enc) VALUES (?, ?, ?)",
            (entry.id, entry.recorded_at, self._cipher.encrypt_record(record)),
        )
        trimmed = conn.execute(
            """DELETE FROM progress_entries WHERE seq NOT IN (
                   SELECT seq FROM progress_entries
                   ORDER BY recorded_at DESC, seq DESC LIMIT ?
               )""",
            (self._limit,),
        ).rowcount
        conn.commit()
        logger.info("Saved progress entry %s (recorded_at=%s)", entry.id, entry.recorded_at)
        if trimmed:
            logger.debug("Trimmed %d progress entries beyond limit %d", trimmed, self._limit)
        return entry

    def history(self, limit: int | None = None) -> list[ProgressEntry]:
        """History entries by ``recorded_at``, oldest first."""
        if limit is not None and limit <= 0:
            return []
        query = (
            "SELECT id, recorded_at, record_enc FROM progress_entries "
            "ORDER BY recorded_at DESC, seq DESC"
        )
        params: list[Any] = []
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        rows = self._db.connection.execute(query, params).fetchall()
        return [self._row_to_entry(row) for row in reversed(rows)]

    def count_entries(self) -> int:
        row = self._db.connection.execute("SELECT COUNT(*) FROM progress_entries").fetchone()
        return row[0]

    def clear(self) -> int:
        """Delete the current record and all history."""
        conn = self._db.connection
        count = self.count_entries()
        conn.execute("DELETE FROM progress_entries")
        conn.execute("DELETE FROM current_record")
        conn.commit()
        logger.warning("Deleted ALL health data: %d progress entries removed", count)
        return count

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _row_to_entry(self, row: Any) -> ProgressEntry:
        return ProgressEntry(
            id=row["id"],
            recorded_at=row["recorded_at"],
            record=self._cipher.decrypt_record(row["record_enc"]),
        )
