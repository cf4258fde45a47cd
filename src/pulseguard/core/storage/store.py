"""The health store: current record plus a capped rolling history.

Callers receive a store object and use ``get/set/append``; there is no
module-level current record. History is ordered by ``recorded_at`` (ISO
8601 text), with insertion order breaking ties, so the limit always drops
the earliest-dated entries even when older data is imported late.
"""

from __future__ import annotations

import bisect
import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol, runtime_checkable

from pulseguard.core.storage.models import ProgressEntry
from pulseguard.domains.health.domain_logic.models import HealthRecord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 30


class StoreError(Exception):
    """Raised when a store is misconfigured or a store operation fails."""


def new_entry_id() -> str:
    return str(uuid.uuid4())


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def check_history_limit(history_limit: int) -> int:
    if history_limit < 1:
        raise StoreError(f"history_limit must be at least 1, got {history_limit}")
    return history_limit


@runtime_checkable
class HealthStore(Protocol):
    """Holds the latest submitted record and the submission history."""

    @property
    def history_limit(self) -> int:
        """Maximum number of history entries kept."""
        ...

    def get(self) -> HealthRecord | None:
        """The current record, or None before the first submission."""
        ...

    def set(self, record: HealthRecord) -> None:
        """Replace the current record."""
        ...

    def append(self, record: HealthRecord, recorded_at: str | None = None) -> ProgressEntry:
        """Add a record to the history, dropping the earliest-dated beyond the limit."""
        ...

    def history(self, limit: int | None = None) -> list[ProgressEntry]:
        """History entries by ``recorded_at``, oldest first. ``limit`` keeps the newest N."""
        ...

    def clear(self) -> int:
        """Forget the current record and the history. Returns entries removed."""
        ...


class InMemoryHealthStore:
    """HealthStore that lives for the lifetime of the process.

    Used when no encryption key is configured, and in tests.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._limit = check_history_limit(history_limit)
        self._current: HealthRecord | None = None
        self._history: list[ProgressEntry] = []

    @property
    def history_limit(self) -> int:
        return self._limit

    def get(self) -> HealthRecord | None:
        return self._current

    def set(self, record: HealthRecord) -> None:
        self._current = record

    def append(self, record: HealthRecord, recorded_at: str | None = None) -> ProgressEntry:
        entry = ProgressEntry(
            id=new_entry_id(),
            recorded_at=recorded_at or now_iso(),
            record=record,
        )
        position = bisect.bisect_right(
            self._history, entry.recorded_at, key=lambda e: e.recorded_at
        )
        self._history.insert(position, entry)
        overflow = len(self._history) - self._limit
        if overflow > 0:
            del self._history[:overflow]
            logger.debug("Dropped %d history entries beyond limit %d", overflow, self._limit)
        return entry

    def history(self, limit: int | None = None) -> list[ProgressEntry]:
        if limit is not None:
            return self._history[-limit:] if limit > 0 else []
        return list(self._history)

    def clear(self) -> int:
        count = len(self._history)
        self._history.clear()
        self._current = None
        return count
