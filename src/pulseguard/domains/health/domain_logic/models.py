"""Health record models, enumerations, and rule-engine result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class StressLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class SaltIntake(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class BloodGroup(str, Enum):
    A = "A"
    B = "B"
    AB = "AB"
    O = "O"  # noqa: E741


class Severity(str, Enum):
    """Display tone attached to a classification or score."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    MUTED = "muted"


class BPStage(str, Enum):
    NORMAL = "Normal"
    ELEVATED = "Elevated"
    STAGE_1 = "Stage 1 Hypertension"
    STAGE_2 = "Stage 2 Hypertension"
    CRISIS = "Hypertensive Crisis"
    UNKNOWN = "Unknown"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class WeatherRiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthRecord:
    """One set of health measurements, as submitted from an assessment."""

    # Vitals
    systolic: float           # mmHg
    diastolic: float          # mmHg
    heart_rate: float         # bpm
    bmi: float                # kg/m2
    cholesterol: float        # mg/dL
    blood_sugar: float        # mg/dL

    # Lifestyle
    sleep_hours: float
    stress_level: StressLevel
    salt_intake: SaltIntake
    physical_activity: bool
    family_history: bool

    # Anthropometrics
    height: float             # cm
    weight: float             # kg
    age: float
    gender: Gender

    # Genealogy
    parent_blood_group_1: BloodGroup = BloodGroup.A
    parent_blood_group_2: BloodGroup = BloodGroup.B

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable dict with enum members as their literals."""
        return {
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "heart_rate": self.heart_rate,
            "bmi": self.bmi,
            "cholesterol": self.cholesterol,
            "blood_sugar": self.blood_sugar,
            "sleep_hours": self.sleep_hours,
            "stress_level": self.stress_level.value,
            "salt_intake": self.salt_intake.value,
            "physical_activity": self.physical_activity,
            "family_history": self.family_history,
            "height": self.height,
            "weight": self.weight,
            "age": self.age,
            "gender": self.gender.value,
            "parent_blood_group_1": self.parent_blood_group_1.value,
            "parent_blood_group_2": self.parent_blood_group_2.value,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> HealthRecord:
        """Rebuild a record from :meth:`to_payload` output.

        Raises:
            ValueError: If an enum field holds an unknown literal.
            KeyError: If a required field is missing.
        """
        return cls(
            systolic=payload["systolic"],
            diastolic=payload["diastolic"],
            heart_rate=payload["heart_rate"],
            bmi=payload["bmi"],
            cholesterol=payload["cholesterol"],
            blood_sugar=payload["blood_sugar"],
            sleep_hours=payload["sleep_hours"],
            stress_level=StressLevel(payload["stress_level"]),
            salt_intake=SaltIntake(payload["salt_intake"]),
            physical_activity=bool(payload["physical_activity"]),
            family_history=bool(payload["family_history"]),
            height=payload["height"],
            weight=payload["weight"],
            age=payload["age"],
            gender=Gender(payload["gender"]),
            parent_blood_group_1=BloodGroup(payload.get("parent_blood_group_1", "A")),
            parent_blood_group_2=BloodGroup(payload.get("parent_blood_group_2", "B")),
        )


@dataclass(frozen=True)
class WeatherReading:
    """Ambient conditions from a weather lookup."""

    temperature: float        # Celsius
    humidity_percent: float   # 0-100


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BPClassification:
    stage: BPStage
    severity: Severity
    description: str


@dataclass(frozen=True)
class HealthInsight:
    category: str
    message: str
    priority: Priority


@dataclass(frozen=True)
class TrendPoint:
    day: str
    systolic: int
    diastolic: int


@dataclass(frozen=True)
class BMIInterpretation:
    category: BMICategory
    severity: Severity


@dataclass(frozen=True)
class WeatherRisk:
    level: WeatherRiskLevel
    score: int
    severity: Severity
    advice: str
