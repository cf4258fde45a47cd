"""Plain-text health report.

``build_report`` gathers every engine result for one record into titled
sections; ``render_report_pages`` lays the sections out on fixed-height
pages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from pulseguard.domains.health.domain_logic.assessment import assess_record
from pulseguard.domains.health.domain_logic.blood_pressure import RandomSource
from pulseguard.domains.health.domain_logic.models import HealthRecord
from pulseguard.domains.health.domain_logic.numeric import format_number

REPORT_TITLE = "PulseGuard Health Report"
DISCLAIMER = (
    "This report is for informational purposes only. Consult a healthcare professional."
)


@dataclass(frozen=True)
class ReportSection:
    title: str
    lines: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HealthReport:
    title: str
    generated_on: date
    sections: list[ReportSection]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def build_report(
    record: HealthRecord,
    generated_on: date,
    rng: RandomSource | None = None,
) -> HealthReport:
    """Assemble the report sections for ``record``."""
    a = assess_record(record, rng=rng)
    calc = a.calculators
    n = format_number

    patient = ReportSection("PATIENT DATA", [
        f"Age: {n(record.age)} | Gender: {record.gender.value} | "
        f"Height: {n(record.height)}cm | Weight: {n(record.weight)}kg",
        f"BMI: {n(record.bmi)} ({calc.bmi.category.value}) | Heart Rate: {n(record.heart_rate)} bpm",
    ])

    blood_pressure = ReportSection("BLOOD PRESSURE ANALYSIS", [
        f"BP: {n(record.systolic)}/{n(record.diastolic)} mmHg - {a.blood_pressure.stage.value}",
        f"Risk Score: {a.risk_score}/100 | Stability: {a.stability}% | Readiness: {a.readiness}%",
        f"Patterns: {', '.join(a.patterns)}",
    ])

    metrics = ReportSection("HEALTH METRICS", [
        f"Body Fat: {n(calc.body_fat_pct)}% | Ideal Weight: {n(calc.ideal_weight_kg)}kg",
        f"Cholesterol: {n(record.cholesterol)} mg/dL | Blood Sugar: {n(record.blood_sugar)} mg/dL",
        f"Daily Water: {n(calc.water_litres)}L | Sodium Limit: {calc.sodium_limit_mg}mg",
        f"Genetic Risk: {calc.genetic_risk}% | Metabolic Risk: {calc.metabolic_risk}%",
        f"Sleep: {n(record.sleep_hours)}h | Stress: {record.stress_level.value} | "
        f"Salt: {record.salt_intake.value}",
        f"Physical Activity: {_yes_no(record.physical_activity)} | "
        f"Family History: {_yes_no(record.family_history)}",
        "Blood Group (offspring): "
        + ", ".join(group.value for group in calc.offspring_blood_groups),
    ])

    recommendations = ReportSection(
        "RECOMMENDATIONS",
        [f"{insight.category}: {insight.message}" for insight in a.insights],
    )

    return HealthReport(
        title=REPORT_TITLE,
        generated_on=generated_on,
        sections=[patient, blood_pressure, metrics, recommendations],
    )


def render_report_pages(report: HealthReport, lines_per_page: int = 40) -> list[str]:
    """Lay the report out as pages of at most ``lines_per_page`` lines.

    A section title is never the last line of a page, and pages never start
    with a blank line.

    Raises:
        ValueError: If ``lines_per_page`` is less than 2.
    """
    if lines_per_page < 2:
        raise ValueError(f"lines_per_page must be at least 2, got {lines_per_page}")

    pages: list[list[str]] = [[]]

    def add(line: str, *, keep_with_next: bool = False) -> None:
        page = pages[-1]
        room = lines_per_page - len(page)
        if room <= 0 or (keep_with_next and room == 1):
            pages.append([])
            page = pages[-1]
        if not page and not line:
            return
        page.append(line)

    add(report.title)
    add(f"Generated: {report.generated_on.isoformat()}")
    add("")
    for section in report.sections:
        add(section.title, keep_with_next=True)
        for line in section.lines:
            add(line)
        add("")
    add(DISCLAIMER)

    return ["\n".join(page) for page in pages if page]
