"""Data models for the health persistence layer."""

from __future__ import annotations

from dataclasses import dataclass

from pulseguard.domains.health.domain_logic.models import HealthRecord


@dataclass(frozen=True)
class ProgressEntry:
    """A record kept in the rolling history, with when it was submitted."""

    id: str
    recorded_at: str  # ISO 8601
    record: HealthRecord
