"""Tests for risk, stability, and readiness scoring."""

from __future__ import annotations

import pytest

from pulseguard.domains.health.domain_logic.models import (
    BPStage,
    SaltIntake,
    Severity,
    StressLevel,
)
from pulseguard.domains.health.domain_logic.scoring import (
    BP_STAGE_RISK_POINTS,
    SALT_RISK_POINTS,
    STRESS_RISK_POINTS,
    STRESS_STABILITY_PENALTY,
    calculate_health_readiness,
    calculate_health_stability,
    calculate_risk_score,
    risk_severity,
    sleep_quality_score,
)


def _worst_case(make_record):
    return make_record(
        systolic=160,
        diastolic=100,
        bmi=32,
        cholesterol=250,
        blood_sugar=130,
        sleep_hours=5,
        stress_level=StressLevel.HIGH,
        salt_intake=SaltIntake.HIGH,
        physical_activity=False,
        family_history=True,
        age=65,
    )


def _moderate_case(make_record):
    return make_record(
        systolic=135,
        diastolic=85,
        bmi=27,
        cholesterol=210,
        blood_sugar=110,
        sleep_hours=7,
        stress_level=StressLevel.MEDIUM,
        salt_intake=SaltIntake.MEDIUM,
        age=50,
    )


class TestPointTables:
    def test_tables_cover_every_member(self):
        assert set(BP_STAGE_RISK_POINTS) == set(BPStage)
        assert set(STRESS_RISK_POINTS) == set(StressLevel)
        assert set(SALT_RISK_POINTS) == set(SaltIntake)
        assert set(STRESS_STABILITY_PENALTY) == set(StressLevel)

    def test_unreachable_crisis_still_has_points(self):
        assert BP_STAGE_RISK_POINTS[BPStage.CRISIS] == 50


# ===========================================================================
# Test: Risk score
# ===========================================================================

class TestRiskScore:
    def test_healthy_record_scores_zero(self, healthy_record):
        assert calculate_risk_score(healthy_record) == 0

    def test_moderate_record(self, make_record):
        # Stage 1 20 + bmi 5 + chol 5 + sugar 5 + stress 5 + salt 4 + age 5
        assert calculate_risk_score(_moderate_case(make_record)) == 49

    def test_worst_case_clamps_to_100(self, make_record):
        assert calculate_risk_score(_worst_case(make_record)) == 100

    def test_stage_2_points(self, make_record):
        assert calculate_risk_score(make_record(systolic=150, diastolic=95)) == 35

    def test_elevated_adds_nothing(self, make_record):
        assert calculate_risk_score(make_record(systolic=125, diastolic=75)) == 0

    @pytest.mark.parametrize(
        "overrides, expected",
        [
            ({"bmi": 25}, 0),
            ({"bmi": 25.1}, 5),
            ({"bmi": 30.1}, 10),
            ({"cholesterol": 201}, 5),
            ({"cholesterol": 241}, 10),
            ({"blood_sugar": 101}, 5),
            ({"blood_sugar": 127}, 10),
            ({"sleep_hours": 5.9}, 8),
            ({"sleep_hours": 6}, 0),
            ({"physical_activity": False}, 8),
            ({"family_history": True}, 12),
            ({"age": 46}, 5),
            ({"age": 61}, 8),
            ({"age": 45}, 0),
        ],
    )
    def test_single_factor_points(self, make_record, overrides, expected):
        assert calculate_risk_score(make_record(**overrides)) == expected

    def test_stress_and_salt_tables(self, make_record):
        record = make_record(stress_level=StressLevel.HIGH, salt_intake=SaltIntake.MEDIUM)
        assert calculate_risk_score(record) == 14

    def test_always_in_range(self, make_record):
        for systolic in (90, 125, 135, 170, 220):
            for stress in StressLevel:
                score = calculate_risk_score(make_record(systolic=systolic, stress_level=stress))
                assert 0 <= score <= 100


class TestRiskSeverity:
    @pytest.mark.parametrize(
        "score, severity",
        [
            (0, Severity.SUCCESS),
            (30, Severity.SUCCESS),
            (31, Severity.WARNING),
            (60, Severity.WARNING),
            (61, Severity.DANGER),
            (100, Severity.DANGER),
        ],
    )
    def test_thresholds(self, score, severity):
        assert risk_severity(score) is severity


# ===========================================================================
# Test: Stability
# ===========================================================================

class TestStability:
    def test_healthy_record_is_fully_stable(self, healthy_record):
        assert calculate_health_stability(healthy_record) == 100

    def test_moderate_record(self, make_record):
        # Non-normal BP -20, overweight -8
        assert calculate_health_stability(_moderate_case(make_record)) == 72

    def test_worst_case(self, make_record):
        assert calculate_health_stability(_worst_case(make_record)) == 10

    def test_elevated_bp_counts_as_non_normal(self, make_record):
        assert calculate_health_stability(make_record(systolic=125, diastolic=75)) == 80

    def test_underweight_penalty(self, make_record):
        assert calculate_health_stability(make_record(bmi=18)) == 85

    def test_oversleeping_penalty(self, make_record):
        assert calculate_health_stability(make_record(sleep_hours=10)) == 90

    def test_medium_stress_has_no_penalty(self, make_record):
        assert calculate_health_stability(make_record(stress_level=StressLevel.MEDIUM)) == 100
        assert calculate_health_stability(make_record(stress_level=StressLevel.HIGH)) == 85


# ===========================================================================
# Test: Readiness
# ===========================================================================

class TestSleepQuality:
    @pytest.mark.parametrize(
        "hours, expected",
        [(7, 100), (8, 100), (9, 100), (6.5, 70), (6, 60), (10, 60), (2, 0), (0, 0)],
    )
    def test_curve(self, hours, expected):
        assert sleep_quality_score(hours) == pytest.approx(expected)


class TestReadiness:
    def test_healthy_record(self, healthy_record):
        assert calculate_health_readiness(healthy_record) == 100

    def test_moderate_record(self, make_record):
        # 72*0.4 + 51*0.4 + 100*0.2 = 69.2
        assert calculate_health_readiness(_moderate_case(make_record)) == 69

    def test_worst_case(self, make_record):
        # 10*0.4 + 0*0.4 + 40*0.2 = 12
        assert calculate_health_readiness(_worst_case(make_record)) == 12

    def test_returns_integer(self, make_record):
        assert isinstance(calculate_health_readiness(make_record(sleep_hours=6.5)), int)
