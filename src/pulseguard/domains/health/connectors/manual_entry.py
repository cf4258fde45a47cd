"""Build validated health records from manually entered values.

This is the validation boundary: the rule engine accepts any numeric or enum
input, so implausible or malformed values are rejected here, before a record
is stored or scored.
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, TypeVar

from pulseguard.domains.health.domain_logic.models import (
    BloodGroup,
    Gender,
    HealthRecord,
    SaltIntake,
    StressLevel,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# Readings below these are treated as entry mistakes
MIN_PLAUSIBLE_SYSTOLIC = 60
MIN_PLAUSIBLE_DIASTOLIC = 40

NUMERIC_FIELDS = (
    "systolic",
    "diastolic",
    "heart_rate",
    "bmi",
    "cholesterol",
    "blood_sugar",
    "sleep_hours",
    "height",
    "weight",
    "age",
)
POSITIVE_FIELDS = frozenset({"height", "weight", "age"})
BOOLEAN_FIELDS = ("physical_activity", "family_history")
REQUIRED_FIELDS = frozenset(
    NUMERIC_FIELDS + BOOLEAN_FIELDS + ("stress_level", "salt_intake", "gender")
)
OPTIONAL_FIELDS = frozenset({"parent_blood_group_1", "parent_blood_group_2"})

_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off"}


class RecordValidationError(ValueError):
    """Raised when entered values cannot form a plausible health record."""


def parse_choice(enum_cls: type[E], value: Any, field_name: str) -> E:
    """Match ``value`` to a member of ``enum_cls`` by its literal, ignoring case."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == text:
            return member
    choices = ", ".join(str(member.value) for member in enum_cls)
    raise RecordValidationError(f"{field_name} must be one of: {choices}; got {value!r}")


def _parse_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise RecordValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise RecordValidationError(f"{field_name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise RecordValidationError(f"{field_name} must be finite, got {value!r}")
    if number < 0 or (field_name in POSITIVE_FIELDS and number == 0):
        raise RecordValidationError(f"{field_name} must be positive, got {value!r}")
    return number


def _parse_flag(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise RecordValidationError(f"{field_name} must be yes/no, got {value!r}")


def validate_blood_pressure(systolic: float, diastolic: float) -> None:
    """Reject readings below the plausible floor.

    Raises:
        RecordValidationError: If systolic < 60 or diastolic < 40.
    """
    if systolic < MIN_PLAUSIBLE_SYSTOLIC or diastolic < MIN_PLAUSIBLE_DIASTOLIC:
        raise RecordValidationError(
            f"Please enter valid BP values (got {systolic:g}/{diastolic:g} mmHg; "
            f"minimum {MIN_PLAUSIBLE_SYSTOLIC}/{MIN_PLAUSIBLE_DIASTOLIC})."
        )


def build_health_record(**fields: Any) -> HealthRecord:
    """Validate entered values and build a :class:`HealthRecord`.

    Enum fields accept their literals in any case. Booleans accept yes/no
    style strings. Parent blood groups default to A and B.

    Raises:
        RecordValidationError: On missing, unknown, or implausible fields.
    """
    unknown = set(fields) - REQUIRED_FIELDS - OPTIONAL_FIELDS
    if unknown:
        raise RecordValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    missing = {name for name in REQUIRED_FIELDS if fields.get(name) is None}
    if missing:
        raise RecordValidationError(f"Missing fields: {', '.join(sorted(missing))}")

    numbers = {name: _parse_number(fields[name], name) for name in NUMERIC_FIELDS}
    validate_blood_pressure(numbers["systolic"], numbers["diastolic"])

    record = HealthRecord(
        **numbers,
        stress_level=parse_choice(StressLevel, fields["stress_level"], "stress_level"),
        salt_intake=parse_choice(SaltIntake, fields["salt_intake"], "salt_intake"),
        physical_activity=_parse_flag(fields["physical_activity"], "physical_activity"),
        family_history=_parse_flag(fields["family_history"], "family_history"),
        gender=parse_choice(Gender, fields["gender"], "gender"),
        parent_blood_group_1=parse_choice(
            BloodGroup, fields.get("parent_blood_group_1") or "A", "parent_blood_group_1"
        ),
        parent_blood_group_2=parse_choice(
            BloodGroup, fields.get("parent_blood_group_2") or "B", "parent_blood_group_2"
        ),
    )
    logger.debug("Built health record %s/%s mmHg", record.systolic, record.diastolic)
    return record
