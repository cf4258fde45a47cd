"""Lifestyle recommendations derived from a health record."""

from __future__ import annotations

from pulseguard.domains.health.domain_logic.calculators import calculate_water_requirement
from pulseguard.domains.health.domain_logic.models import (
    HealthInsight,
    HealthRecord,
    Priority,
    SaltIntake,
    StressLevel,
)
from pulseguard.domains.health.domain_logic.numeric import format_number


def get_health_insights(record: HealthRecord) -> list[HealthInsight]:
    """Return recommendations in a fixed order, ending with hydration.

    Each rule is independent. Priorities are fixed per rule.
    """
    insights: list[HealthInsight] = []

    if record.sleep_hours < 7:
        insights.append(HealthInsight(
            "Sleep",
            f"Aim for 7-9 hours of sleep. You're getting {format_number(record.sleep_hours)}h.",
            Priority.MEDIUM,
        ))
    if record.bmi > 25:
        insights.append(HealthInsight(
            "Weight",
            "Consider a balanced diet to reach a healthy BMI range (18.5-24.9).",
            Priority.MEDIUM,
        ))
    if not record.physical_activity:
        insights.append(HealthInsight(
            "Exercise",
            "Aim for 150 minutes of moderate aerobic activity per week.",
            Priority.HIGH,
        ))
    if record.stress_level is StressLevel.HIGH:
        insights.append(HealthInsight(
            "Stress",
            "Practice relaxation techniques like meditation or deep breathing.",
            Priority.HIGH,
        ))
    if record.salt_intake is SaltIntake.HIGH:
        insights.append(HealthInsight(
            "Diet",
            "Reduce sodium intake to less than 2,300mg per day.",
            Priority.HIGH,
        ))
    if record.cholesterol > 200:
        insights.append(HealthInsight(
            "Cholesterol",
            "Include more fiber-rich foods and omega-3 fatty acids.",
            Priority.MEDIUM,
        ))
    if record.blood_sugar > 100:
        insights.append(HealthInsight(
            "Blood Sugar",
            "Monitor blood sugar levels and reduce refined carbohydrates.",
            Priority.MEDIUM,
        ))

    water = calculate_water_requirement(record.weight)
    insights.append(HealthInsight(
        "Hydration",
        f"Drink at least {format_number(water)}L of water daily.",
        Priority.LOW,
    ))
    return insights
