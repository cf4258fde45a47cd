"""Blood pressure classification, pattern detection, and trend projection.

``classify_bp`` is the single source of BP stage and severity; every score
and display that depends on the stage goes through it.
"""

from __future__ import annotations

import random
from typing import Callable, Protocol

from pulseguard.domains.health.domain_logic.models import (
    BPClassification,
    BPStage,
    Severity,
    TrendPoint,
)
from pulseguard.domains.health.domain_logic.numeric import round_half_up


class RandomSource(Protocol):
    """Anything with ``uniform(a, b)``: ``random.Random`` or a test double."""

    def uniform(self, a: float, b: float) -> float:
        ...


_DEFAULT_RNG = random.Random()

TREND_DAYS = 7
SYSTOLIC_VARIANCE = 5.0
DIASTOLIC_VARIANCE = 3.0
SYSTOLIC_DRIFT_PER_DAY = 0.5
DIASTOLIC_DRIFT_PER_DAY = 0.3

NO_PATTERN = "No concerning patterns detected"


# ---------------------------------------------------------------------------
# Classification ladder
# ---------------------------------------------------------------------------

# Evaluated top to bottom; the first matching rule wins. The crisis rule sits
# after Stage 2 and can never match a finite reading.
_BP_LADDER: list[tuple[Callable[[float, float], bool], BPClassification]] = [
    (
        lambda s, d: s < 120 and d < 80,
        BPClassification(
            BPStage.NORMAL,
            Severity.SUCCESS,
            "Your blood pressure is within the healthy range.",
        ),
    ),
    (
        lambda s, d: s < 130 and d < 80,
        BPClassification(
            BPStage.ELEVATED,
            Severity.WARNING,
            "Elevated BP. Lifestyle changes recommended.",
        ),
    ),
    (
        lambda s, d: s < 140 or d < 90,
        BPClassification(
            BPStage.STAGE_1,
            Severity.WARNING,
            "Stage 1 hypertension. Consult a healthcare provider.",
        ),
    ),
    (
        lambda s, d: s >= 140 or d >= 90,
        BPClassification(
            BPStage.STAGE_2,
            Severity.DANGER,
            "Stage 2 hypertension. Seek medical attention.",
        ),
    ),
    (
        lambda s, d: s > 180 or d > 120,
        BPClassification(
            BPStage.CRISIS,
            Severity.DANGER,
            "EMERGENCY: Seek immediate medical attention!",
        ),
    ),
]

_UNKNOWN = BPClassification(BPStage.UNKNOWN, Severity.MUTED, "")


def classify_bp(systolic: float, diastolic: float) -> BPClassification:
    """Classify a blood pressure reading into a stage.

    Returns ``Unknown`` only when no comparison holds, which happens for NaN
    readings.
    """
    for matches, classification in _BP_LADDER:
        if matches(systolic, diastolic):
            return classification
    return _UNKNOWN


# ---------------------------------------------------------------------------
# Pattern detection
# ---------------------------------------------------------------------------

def detect_bp_patterns(systolic: float, diastolic: float) -> list[str]:
    """Return every pattern label the reading matches, in a fixed order."""
    patterns: list[str] = []
    if systolic > 135 and diastolic < 85:
        patterns.append("Isolated Systolic Hypertension")
    if systolic > 140:
        patterns.append("Morning Surge Risk")
    if diastolic > 90:
        patterns.append("Nocturnal Hypertension Risk")
    if systolic - diastolic > 60:
        patterns.append("Wide Pulse Pressure")
    if not patterns:
        patterns.append(NO_PATTERN)
    return patterns


# ---------------------------------------------------------------------------
# Trend projection
# ---------------------------------------------------------------------------

def predict_bp_trend(
    systolic: float,
    diastolic: float,
    rng: RandomSource | None = None,
) -> list[TrendPoint]:
    """Project an illustrative 7-day BP series.

    Each day adds uniform noise (+/-5 systolic, +/-3 diastolic) on top of a
    deterministic downward drift of 0.5 and 0.3 mmHg per day. This is not a
    forecast: repeated calls with the default source return different series.

    Args:
        systolic: Current systolic reading.
        diastolic: Current diastolic reading.
        rng: Randomness source. Defaults to an unseeded module-level
            ``random.Random``.
    """
    source = rng if rng is not None else _DEFAULT_RNG
    points: list[TrendPoint] = []
    for i in range(TREND_DAYS):
        s_noise = source.uniform(-SYSTOLIC_VARIANCE, SYSTOLIC_VARIANCE)
        d_noise = source.uniform(-DIASTOLIC_VARIANCE, DIASTOLIC_VARIANCE)
        points.append(TrendPoint(
            day=f"Day {i + 1}",
            systolic=round_half_up(systolic + s_noise - i * SYSTOLIC_DRIFT_PER_DAY),
            diastolic=round_half_up(diastolic + d_noise - i * DIASTOLIC_DRIFT_PER_DAY),
        ))
    return points
