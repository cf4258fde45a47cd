"""Tests for the one-call record assessment."""

from __future__ import annotations

import json

from pulseguard.domains.health.domain_logic.assessment import assess_record, run_calculators
from pulseguard.domains.health.domain_logic.blood_pressure import NO_PATTERN
from pulseguard.domains.health.domain_logic.models import (
    BloodGroup,
    BMICategory,
    BPStage,
    Gender,
    Severity,
    StressLevel,
)


class TestRunCalculators:
    def test_healthy_record(self, healthy_record):
        calc = run_calculators(healthy_record)
        assert calc.bmi.category is BMICategory.NORMAL
        assert calc.body_fat_pct == 17.1
        assert calc.ideal_weight_kg == 70.5
        assert calc.water_litres == 2.3
        assert calc.sodium_limit_mg == 2300
        assert calc.genetic_risk == 0
        assert calc.metabolic_risk == 0
        assert calc.offspring_blood_groups == [
            BloodGroup.AB, BloodGroup.A, BloodGroup.B, BloodGroup.O,
        ]

    def test_uses_record_gender_and_parents(self, make_record):
        calc = run_calculators(make_record(
            gender=Gender.FEMALE,
            parent_blood_group_1=BloodGroup.O,
            parent_blood_group_2=BloodGroup.O,
        ))
        assert calc.body_fat_pct == 27.9
        assert calc.offspring_blood_groups == [BloodGroup.O]


class TestAssessRecord:
    def test_healthy_record(self, healthy_record, zero_rng):
        result = assess_record(healthy_record, rng=zero_rng)
        assert result.blood_pressure.stage is BPStage.NORMAL
        assert result.risk_score == 0
        assert result.risk_severity is Severity.SUCCESS
        assert result.stability == 100
        assert result.stability_severity is Severity.SUCCESS
        assert result.readiness == 100
        assert result.patterns == [NO_PATTERN]
        assert [i.category for i in result.insights] == ["Hydration"]
        assert [p.systolic for p in result.trend] == [110, 110, 109, 109, 108, 108, 107]

    def test_low_stability_is_danger(self, make_record, zero_rng):
        record = make_record(
            systolic=150,
            diastolic=95,
            bmi=32,
            sleep_hours=5,
            stress_level=StressLevel.HIGH,
            physical_activity=False,
        )
        result = assess_record(record, rng=zero_rng)
        # 100 - 20 - 15 - 10 - 15 - 10
        assert result.stability == 30
        assert result.stability_severity is Severity.DANGER

    def test_deterministic_apart_from_trend(self, healthy_record, fixed_random):
        first = assess_record(healthy_record, rng=fixed_random(4.0))
        second = assess_record(healthy_record, rng=fixed_random(-4.0))
        assert first.trend != second.trend
        assert first.risk_score == second.risk_score
        assert first.insights == second.insights
        assert first.calculators == second.calculators

    def test_as_dict_is_json_serializable(self, healthy_record, zero_rng):
        payload = json.loads(json.dumps(assess_record(healthy_record, rng=zero_rng).as_dict()))
        assert payload["blood_pressure"]["stage"] == "Normal"
        assert payload["blood_pressure"]["severity"] == "success"
        assert payload["insights"][0]["priority"] == "low"
        assert payload["calculators"]["bmi"]["category"] == "Normal"
        assert payload["calculators"]["offspring_blood_groups"] == ["AB", "A", "B", "O"]
        assert len(payload["trend"]) == 7
