"""MCP tools for submitting a health assessment and reading its analysis.

Submissions are validated by the manual-entry connector, become the store's
current record, and are appended to the progress history. The read tools
evaluate the current record with the rule engine.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

if TYPE_CHECKING:
    from pulseguard.core.storage.store import HealthStore
    from pulseguard.domains.health.domain_logic.blood_pressure import RandomSource

from pulseguard.domains.health.connectors.manual_entry import (
    RecordValidationError,
    build_health_record,
)
from pulseguard.domains.health.domain_logic.assessment import assess_record, run_calculators
from pulseguard.domains.health.domain_logic.blood_pressure import classify_bp
from pulseguard.domains.health.domain_logic.calculators import predict_blood_group
from pulseguard.domains.health.domain_logic.report import build_report, render_report_pages
from pulseguard.domains.health.domain_logic.scoring import calculate_risk_score

logger = logging.getLogger(__name__)

NO_RECORD = {
    "status": "no_data",
    "message": "No health assessment on file. Submit one with submit_health_assessment.",
}


def register_assessment_tools(
    mcp: FastMCP,
    store: HealthStore,
    *,
    report_lines_per_page: int = 40,
    rng: RandomSource | None = None,
) -> None:
    """Register assessment, analysis, calculator, and report tools."""

    @mcp.tool
    async def submit_health_assessment(
        ctx: Context,
        systolic: float,
        diastolic: float,
        heart_rate: float = 72,
        bmi: float = 24,
        cholesterol: float = 190,
        blood_sugar: float = 95,
        sleep_hours: float = 7,
        stress_level: str = "Medium",
        salt_intake: str = "Medium",
        physical_activity: bool = True,
        family_history: bool = False,
        height: float = 170,
        weight: float = 70,
        age: float = 30,
        gender: str = "Male",
        parent_blood_group_1: str = "A",
        parent_blood_group_2: str = "B",
    ) -> str:
        """Submit a health assessment. It becomes the current record and is added to your history.

        Args:
            systolic: Systolic blood pressure (top number), mmHg.
            diastolic: Diastolic blood pressure (bottom number), mmHg.
            heart_rate: Resting heart rate, bpm.
            bmi: Body mass index. Normal is 18.5-24.9.
            cholesterol: Total cholesterol, mg/dL.
            blood_sugar: Fasting blood sugar, mg/dL.
            sleep_hours: Average hours of sleep per night.
            stress_level: Low, Medium, or High.
            salt_intake: Low, Medium, or High.
            physical_activity: Whether you do regular aerobic activity.
            family_history: Whether hypertension runs in your family.
            height: Height in cm.
            weight: Weight in kg.
            age: Age in years.
            gender: Male or Female.
            parent_blood_group_1: First parent's blood group (A, B, AB, O).
            parent_blood_group_2: Second parent's blood group (A, B, AB, O).
        """
        try:
            record = build_health_record(
                systolic=systolic,
                diastolic=diastolic,
                heart_rate=heart_rate,
                bmi=bmi,
                cholesterol=cholesterol,
                blood_sugar=blood_sugar,
                sleep_hours=sleep_hours,
                stress_level=stress_level,
                salt_intake=salt_intake,
                physical_activity=physical_activity,
                family_history=family_history,
                height=height,
                weight=weight,
                age=age,
                gender=gender,
                parent_blood_group_1=parent_blood_group_1,
                parent_blood_group_2=parent_blood_group_2,
            )
        except RecordValidationError as exc:
            logger.info("Rejected health assessment: %s", exc)
            return json.dumps({"status": "error", "message": str(exc)})

        store.set(record)
        entry = store.append(record, recorded_at=datetime.now(timezone.utc).isoformat())
        bp = classify_bp(record.systolic, record.diastolic)
        logger.info("Health assessment saved (entry %s, stage=%s)", entry.id, bp.stage.value)
        return json.dumps({
            "status": "saved",
            "entry_id": entry.id,
            "recorded_at": entry.recorded_at,
            "stage": bp.stage,
            "severity": bp.severity,
            "risk_score": calculate_risk_score(record),
        })

    @mcp.tool
    async def health_analysis(ctx: Context) -> str:
        """Analyze the current record: BP stage, risk, stability, readiness, patterns, insights, and a 7-day BP projection."""
        record = store.get()
        if record is None:
            return json.dumps(NO_RECORD)
        assessment = assess_record(record, rng=rng)
        result = assessment.as_dict()
        result["status"] = "ok"
        return json.dumps(result, indent=2)

    @mcp.tool
    async def health_calculators(ctx: Context) -> str:
        """Body fat, ideal weight, water and sodium targets, genetic and metabolic risk, and offspring blood groups for the current record."""
        record = store.get()
        if record is None:
            return json.dumps(NO_RECORD)
        result = asdict(run_calculators(record))
        result["status"] = "ok"
        return json.dumps(result, indent=2)

    @mcp.tool
    async def blood_group_prediction(
        ctx: Context,
        parent_1: str,
        parent_2: str,
    ) -> str:
        """List the blood groups a child of two parents could have.

        This is a simplified educational Punnett square, not a genetic test.

        Args:
            parent_1: First parent's blood group (A, B, AB, O).
            parent_2: Second parent's blood group (A, B, AB, O).
        """
        groups = predict_blood_group(parent_1.strip().upper(), parent_2.strip().upper())
        return json.dumps({
            "status": "ok",
            "parents": [parent_1, parent_2],
            "possible_groups": groups,
        })

    @mcp.tool
    async def health_report(ctx: Context, lines_per_page: int | None = None) -> str:
        """Generate a paginated plain-text report for the current record.

        Args:
            lines_per_page: Page height in lines. Defaults to the server setting.
        """
        record = store.get()
        if record is None:
            return json.dumps(NO_RECORD)
        page_height = lines_per_page if lines_per_page is not None else report_lines_per_page
        if page_height < 2:
            return json.dumps({"status": "error", "message": "lines_per_page must be at least 2"})
        report = build_report(record, datetime.now(timezone.utc).date(), rng=rng)
        pages = render_report_pages(report, page_height)
        return json.dumps({"status": "ok", "page_count": len(pages), "pages": pages}, indent=2)
