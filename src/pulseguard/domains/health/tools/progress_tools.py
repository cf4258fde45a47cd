"""MCP tools for progress history: summaries, listing, import, and deletion."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from pulseguard.core.storage.store import HealthStore

from pulseguard.domains.health.connectors.browser_export import parse_browser_export
from pulseguard.domains.health.connectors.manual_entry import RecordValidationError
from pulseguard.domains.health.domain_logic.blood_pressure import classify_bp
from pulseguard.domains.health.domain_logic.progress import ProgressTracker
from pulseguard.domains.health.domain_logic.scoring import calculate_risk_score

logger = logging.getLogger(__name__)


def register_progress_tools(mcp: FastMCP, store: HealthStore) -> None:
    """Register progress history tools on the MCP server."""
    tracker = ProgressTracker(store)

    @mcp.tool
    async def progress_summary(ctx: Context) -> str:
        """Compare your latest assessment with the previous one and chart your history."""
        summary = tracker.summary()
        if summary["entries"] == 0:
            summary["message"] = "No assessments recorded yet."
            return json.dumps(summary)
        summary["stage_counts"] = {
            stage.value: count for stage, count in tracker.stage_counts().items() if count
        }
        summary["series"] = [asdict(point) for point in tracker.chart_series()]
        return json.dumps(summary, indent=2)

    @mcp.tool
    async def list_progress_history(ctx: Context, limit: int = 10) -> str:
        """List recent assessments, newest first.

        Args:
            limit: Maximum number of entries to return.
        """
        entries = store.history(limit=limit)
        rows = []
        for entry in reversed(entries):
            bp = classify_bp(entry.record.systolic, entry.record.diastolic)
            rows.append({
                "entry_id": entry.id,
                "recorded_at": entry.recorded_at,
                "systolic": entry.record.systolic,
                "diastolic": entry.record.diastolic,
                "stage": bp.stage,
                "risk_score": calculate_risk_score(entry.record),
                "weight": entry.record.weight,
            })
        return json.dumps({"status": "ok", "count": len(rows), "entries": rows}, indent=2)

    @mcp.tool
    async def import_browser_export(ctx: Context, payload: str) -> str:
        """Import data saved by the PulseGuard browser dashboard.

        Accepts the progress list, or an object with the dashboard's
        ``pulseguard_health_data`` and ``pulseguard_progress`` keys.

        Args:
            payload: The exported JSON text.
        """
        try:
            export = parse_browser_export(payload)
        except RecordValidationError as exc:
            logger.info("Rejected browser export: %s", exc)
            return json.dumps({"status": "error", "message": str(exc)})

        # Undated entries get the import time and are never treated as duplicates
        seen = {(entry.recorded_at, entry.record) for entry in store.history()}
        imported = skipped = 0
        for recorded_at, record in export.history:
            if recorded_at and (recorded_at, record) in seen:
                skipped += 1
                continue
            entry = store.append(record, recorded_at=recorded_at or None)
            seen.add((entry.recorded_at, record))
            imported += 1

        if export.current is not None:
            store.set(export.current)
        elif imported and store.get() is None:
            store.set(store.history(limit=1)[0].record)

        logger.info(
            "Imported %d history entries from browser export (%d duplicates skipped)",
            imported, skipped,
        )
        return json.dumps({
            "status": "imported",
            "history_imported": imported,
            "duplicates_skipped": skipped,
            "history_kept": len(store.history()),
            "current_record_set": store.get() is not None,
        })

    @mcp.tool
    async def clear_health_data(ctx: Context, confirm: bool = False) -> str:
        """Delete the current record and the whole progress history.

        Args:
            confirm: Must be true; nothing is deleted otherwise.
        """
        if not confirm:
            return json.dumps({
                "status": "not_confirmed",
                "message": "Pass confirm=true to delete all stored health data.",
            })
        removed = store.clear()
        return json.dumps({"status": "deleted", "entries_removed": removed})
