"""One-call evaluation of a record against every rule in the engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from pulseguard.domains.health.domain_logic.blood_pressure import (
    RandomSource,
    classify_bp,
    detect_bp_patterns,
    predict_bp_trend,
)
from pulseguard.domains.health.domain_logic.calculators import (
    calculate_genetic_risk,
    calculate_ideal_weight,
    calculate_metabolic_risk,
    calculate_sodium_limit,
    calculate_water_requirement,
    estimate_body_fat,
    interpret_bmi,
    predict_blood_group,
)
from pulseguard.domains.health.domain_logic.insights import get_health_insights
from pulseguard.domains.health.domain_logic.models import (
    BloodGroup,
    BMIInterpretation,
    BPClassification,
    HealthInsight,
    HealthRecord,
    Severity,
    TrendPoint,
)
from pulseguard.domains.health.domain_logic.scoring import (
    calculate_health_readiness,
    calculate_health_stability,
    calculate_risk_score,
    risk_severity,
)


@dataclass(frozen=True)
class CalculatorResults:
    """Derived calculator values for one record."""

    bmi: BMIInterpretation
    body_fat_pct: float
    ideal_weight_kg: float
    water_litres: float
    sodium_limit_mg: int
    genetic_risk: int
    metabolic_risk: int
    offspring_blood_groups: list[BloodGroup] = field(default_factory=list)


@dataclass(frozen=True)
class HealthAssessment:
    """Everything the dashboard shows for one record."""

    blood_pressure: BPClassification
    risk_score: int
    risk_severity: Severity
    stability: int
    stability_severity: Severity
    readiness: int
    patterns: list[str]
    insights: list[HealthInsight]
    trend: list[TrendPoint]
    calculators: CalculatorResults

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def run_calculators(record: HealthRecord) -> CalculatorResults:
    return CalculatorResults(
        bmi=interpret_bmi(record.bmi),
        body_fat_pct=estimate_body_fat(record.weight, record.age, record.gender, record.bmi),
        ideal_weight_kg=calculate_ideal_weight(record.height, record.gender),
        water_litres=calculate_water_requirement(record.weight),
        sodium_limit_mg=calculate_sodium_limit(record.systolic),
        genetic_risk=calculate_genetic_risk(record.family_history, record.age, record.bmi),
        metabolic_risk=calculate_metabolic_risk(record.bmi, record.cholesterol, record.blood_sugar),
        offspring_blood_groups=predict_blood_group(
            record.parent_blood_group_1, record.parent_blood_group_2
        ),
    )


def assess_record(record: HealthRecord, rng: RandomSource | None = None) -> HealthAssessment:
    """Evaluate every rule for ``record``.

    Only ``trend`` depends on ``rng``; all other fields are deterministic.
    """
    risk = calculate_risk_score(record)
    stability = calculate_health_stability(record)
    return HealthAssessment(
        blood_pressure=classify_bp(record.systolic, record.diastolic),
        risk_score=risk,
        risk_severity=risk_severity(risk),
        stability=stability,
        # Stability is a "higher is better" score; invert it onto the risk scale
        stability_severity=risk_severity(100 - stability),
        readiness=calculate_health_readiness(record),
        patterns=detect_bp_patterns(record.systolic, record.diastolic),
        insights=get_health_insights(record),
        trend=predict_bp_trend(record.systolic, record.diastolic, rng=rng),
        calculators=run_calculators(record),
    )
