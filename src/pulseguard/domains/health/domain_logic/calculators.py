"""Standalone health calculators: body composition, intake limits, risk indices.

All functions are pure. Enum-keyed tables cover every member of their enum.
"""

from __future__ import annotations

from pulseguard.domains.health.domain_logic.models import (
    BloodGroup,
    BMICategory,
    BMIInterpretation,
    Gender,
    Severity,
)
from pulseguard.domains.health.domain_logic.numeric import clamp, round_half_up

CM_PER_INCH = 2.54

# Devine-style base weight (kg) at 60 inches
IDEAL_WEIGHT_BASE_KG: dict[Gender, float] = {
    Gender.MALE: 50.0,
    Gender.FEMALE: 45.5,
}
IDEAL_WEIGHT_KG_PER_INCH = 2.3

BODY_FAT_OFFSET: dict[Gender, float] = {
    Gender.MALE: -16.2,
    Gender.FEMALE: -5.4,
}

WATER_LITRES_PER_KG = 0.033

# Each phenotype as the allele pair it is modelled with
BLOOD_GROUP_ALLELES: dict[BloodGroup, tuple[str, str]] = {
    BloodGroup.A: ("A", "O"),
    BloodGroup.B: ("B", "O"),
    BloodGroup.AB: ("A", "B"),
    BloodGroup.O: ("O", "O"),
}
_UNKNOWN_ALLELES = ("O", "O")

# Sorted genotype -> phenotype
_PHENOTYPES: dict[str, BloodGroup] = {
    "OO": BloodGroup.O,
    "AA": BloodGroup.A,
    "AO": BloodGroup.A,
    "BB": BloodGroup.B,
    "BO": BloodGroup.B,
    "AB": BloodGroup.AB,
}


# ---------------------------------------------------------------------------
# Body composition
# ---------------------------------------------------------------------------

def calculate_ideal_weight(height_cm: float, gender: Gender) -> float:
    """Ideal body weight in kg, one decimal."""
    height_in = height_cm / CM_PER_INCH
    base = IDEAL_WEIGHT_BASE_KG[gender]
    return round_half_up(base + IDEAL_WEIGHT_KG_PER_INCH * (height_in - 60), 1)


def interpret_bmi(bmi: float) -> BMIInterpretation:
    """Bucket a BMI value at 18.5 / 25 / 30."""
    if bmi < 18.5:
        return BMIInterpretation(BMICategory.UNDERWEIGHT, Severity.WARNING)
    if bmi < 25:
        return BMIInterpretation(BMICategory.NORMAL, Severity.SUCCESS)
    if bmi < 30:
        return BMIInterpretation(BMICategory.OVERWEIGHT, Severity.WARNING)
    return BMIInterpretation(BMICategory.OBESE, Severity.DANGER)


def estimate_body_fat(weight: float, age: float, gender: Gender, bmi: float) -> float:
    """Body fat percentage from BMI and age, one decimal.

    ``weight`` is part of the signature but does not enter the formula.
    """
    return round_half_up(1.20 * bmi + 0.23 * age + BODY_FAT_OFFSET[gender], 1)


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------

def calculate_sodium_limit(systolic: float) -> int:
    """Daily sodium ceiling in mg."""
    if systolic >= 140:
        return 1500
    if systolic >= 130:
        return 1800
    return 2300


def calculate_water_requirement(weight_kg: float) -> float:
    """Daily water in litres, one decimal."""
    return round_half_up(weight_kg * WATER_LITRES_PER_KG, 1)


# ---------------------------------------------------------------------------
# Risk indices
# ---------------------------------------------------------------------------

def calculate_genetic_risk(family_history: bool, age: float, bmi: float) -> int:
    """Inherited hypertension risk in [0, 100]."""
    risk = 0
    if family_history:
        risk += 35
    if age > 55:
        risk += 20
    elif age > 40:
        risk += 10
    if bmi > 30:
        risk += 15
    elif bmi > 25:
        risk += 8
    return int(clamp(risk))


def calculate_metabolic_risk(bmi: float, cholesterol: float, blood_sugar: float) -> int:
    """Metabolic risk in [0, 100]."""
    risk = 0
    if bmi > 30:
        risk += 30
    elif bmi > 25:
        risk += 15
    if cholesterol > 240:
        risk += 25
    elif cholesterol > 200:
        risk += 12
    if blood_sugar > 126:
        risk += 30
    elif blood_sugar > 100:
        risk += 15
    return int(clamp(risk))


# ---------------------------------------------------------------------------
# Blood group
# ---------------------------------------------------------------------------

def _alleles(group: BloodGroup | str) -> tuple[str, str]:
    try:
        return BLOOD_GROUP_ALLELES[BloodGroup(group)]
    except ValueError:
        return _UNKNOWN_ALLELES


def predict_blood_group(
    parent_1: BloodGroup | str, parent_2: BloodGroup | str
) -> list[BloodGroup]:
    """Blood groups a child of these parents could have.

    A simplified Punnett square: one allele from each parent, four crosses.
    The result is a possibility set (deduplicated, in the order first
    reached), not a probability distribution. Unrecognised groups are treated
    as O.
    """
    possible: list[BloodGroup] = []
    for g1 in _alleles(parent_1):
        for g2 in _alleles(parent_2):
            phenotype = _PHENOTYPES["".join(sorted((g1, g2)))]
            if phenotype not in possible:
                possible.append(phenotype)
    return possible
