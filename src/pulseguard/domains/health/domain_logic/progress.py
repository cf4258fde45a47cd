"""Progress over time from the stored submission history.

Compares the latest submission with the one before it and builds the series
plotted on the progress page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pulseguard.core.storage.store import HealthStore
from pulseguard.domains.health.domain_logic.blood_pressure import classify_bp
from pulseguard.domains.health.domain_logic.models import BPStage, Severity
from pulseguard.domains.health.domain_logic.scoring import calculate_risk_score


@dataclass(frozen=True)
class ProgressPoint:
    label: str          # "#1", "#2", ... oldest first
    recorded_at: str
    systolic: float
    diastolic: float
    risk: int
    weight: float


class ProgressTracker:
    """Reads history from a store and summarizes change between entries.

    Usage::

        tracker = ProgressTracker(store)
        tracker.chart_series()
        tracker.summary()
    """

    def __init__(self, store: HealthStore) -> None:
        self._store = store

    def chart_series(self) -> list[ProgressPoint]:
        """One point per history entry, oldest first."""
        return [
            ProgressPoint(
                label=f"#{i + 1}",
                recorded_at=entry.recorded_at,
                systolic=entry.record.systolic,
                diastolic=entry.record.diastolic,
                risk=calculate_risk_score(entry.record),
                weight=entry.record.weight,
            )
            for i, entry in enumerate(self._store.history())
        ]

    def summary(self) -> dict[str, Any]:
        """Latest status plus change since the previous entry.

        Returns:
            Dict with: entries, latest_recorded_at, latest_stage,
            latest_is_healthy, and (with two or more entries)
            bp_change, risk_change, bp_improved, risk_improved.
        """
        history = self._store.history()
        if not history:
            return {"entries": 0, "status": "no_history"}

        latest = history[-1]
        bp = classify_bp(latest.record.systolic, latest.record.diastolic)
        result: dict[str, Any] = {
            "entries": len(history),
            "latest_recorded_at": latest.recorded_at,
            "latest_stage": bp.stage,
            "latest_is_healthy": bp.severity is Severity.SUCCESS,
        }

        if len(history) < 2:
            result["status"] = "single_entry"
            return result

        previous = history[-2]
        bp_change = latest.record.systolic - previous.record.systolic
        risk_change = calculate_risk_score(latest.record) - calculate_risk_score(previous.record)
        result.update({
            "status": "ok",
            "previous_recorded_at": previous.recorded_at,
            "bp_change": bp_change,
            "risk_change": risk_change,
            "bp_improved": bp_change <= 0,
            "risk_improved": risk_change <= 0,
        })
        return result

    def stage_counts(self) -> dict[BPStage, int]:
        """How many history entries fall in each BP stage."""
        counts = {stage: 0 for stage in BPStage}
        for entry in self._store.history():
            counts[classify_bp(entry.record.systolic, entry.record.diastolic).stage] += 1
        return counts
