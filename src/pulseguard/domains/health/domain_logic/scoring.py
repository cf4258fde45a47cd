"""Composite risk, stability, and readiness scores.

Every score is an additive point system over independent predicates. Enum
fields are scored through tables keyed by every member of the enum.
"""

from __future__ import annotations

from pulseguard.domains.health.domain_logic.blood_pressure import classify_bp
from pulseguard.domains.health.domain_logic.models import (
    BPStage,
    HealthRecord,
    SaltIntake,
    Severity,
    StressLevel,
)
from pulseguard.domains.health.domain_logic.numeric import clamp, round_half_up


# ---------------------------------------------------------------------------
# Point tables
# ---------------------------------------------------------------------------

BP_STAGE_RISK_POINTS: dict[BPStage, int] = {
    BPStage.NORMAL: 0,
    BPStage.ELEVATED: 0,
    BPStage.STAGE_1: 20,
    BPStage.STAGE_2: 35,
    BPStage.CRISIS: 50,
    BPStage.UNKNOWN: 0,
}

STRESS_RISK_POINTS: dict[StressLevel, int] = {
    StressLevel.LOW: 0,
    StressLevel.MEDIUM: 5,
    StressLevel.HIGH: 10,
}

SALT_RISK_POINTS: dict[SaltIntake, int] = {
    SaltIntake.LOW: 0,
    SaltIntake.MEDIUM: 4,
    SaltIntake.HIGH: 8,
}

STRESS_STABILITY_PENALTY: dict[StressLevel, int] = {
    StressLevel.LOW: 0,
    StressLevel.MEDIUM: 0,
    StressLevel.HIGH: 15,
}


# ---------------------------------------------------------------------------
# Risk
# ---------------------------------------------------------------------------

def calculate_risk_score(record: HealthRecord) -> int:
    """Hypertension risk index in [0, 100]."""
    stage = classify_bp(record.systolic, record.diastolic).stage
    score = BP_STAGE_RISK_POINTS[stage]

    if record.bmi > 30:
        score += 10
    elif record.bmi > 25:
        score += 5

    if record.cholesterol > 240:
        score += 10
    elif record.cholesterol > 200:
        score += 5

    if record.blood_sugar > 126:
        score += 10
    elif record.blood_sugar > 100:
        score += 5

    if record.sleep_hours < 6:
        score += 8

    score += STRESS_RISK_POINTS[record.stress_level]
    score += SALT_RISK_POINTS[record.salt_intake]

    if not record.physical_activity:
        score += 8
    if record.family_history:
        score += 12

    if record.age > 60:
        score += 8
    elif record.age > 45:
        score += 5

    return int(clamp(score))


def risk_severity(score: float) -> Severity:
    """Map a 0-100 risk-style score to a display severity."""
    if score <= 30:
        return Severity.SUCCESS
    if score <= 60:
        return Severity.WARNING
    return Severity.DANGER


# ---------------------------------------------------------------------------
# Stability
# ---------------------------------------------------------------------------

def calculate_health_stability(record: HealthRecord) -> int:
    """How well current metrics sit within healthy ranges, in [0, 100]."""
    score = 100
    if classify_bp(record.systolic, record.diastolic).stage is not BPStage.NORMAL:
        score -= 20

    if record.bmi < 18.5 or record.bmi > 30:
        score -= 15
    elif record.bmi > 25:
        score -= 8

    if record.sleep_hours < 6 or record.sleep_hours > 9:
        score -= 10

    score -= STRESS_STABILITY_PENALTY[record.stress_level]

    if not record.physical_activity:
        score -= 10
    if record.cholesterol > 240:
        score -= 10
    if record.blood_sugar > 126:
        score -= 10

    return int(clamp(score))


# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------

def sleep_quality_score(sleep_hours: float) -> float:
    """100 inside 7-9 hours, losing 20 points per hour away from 8 otherwise."""
    if 7 <= sleep_hours <= 9:
        return 100
    return max(0, 100 - abs(sleep_hours - 8) * 20)


def calculate_health_readiness(record: HealthRecord) -> int:
    """Daily readiness: 40% stability, 40% inverted risk, 20% sleep."""
    stability = calculate_health_stability(record)
    risk = calculate_risk_score(record)
    sleep_score = sleep_quality_score(record.sleep_hours)
    return round_half_up(stability * 0.4 + (100 - risk) * 0.4 + sleep_score * 0.2)
