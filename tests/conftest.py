"""Shared test fixtures for PulseGuard tests."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENCRYPTION_KEY", "")
    monkeypatch.setenv("HISTORY_LIMIT", "30")
    monkeypatch.setenv("REPORT_LINES_PER_PAGE", "40")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from pulseguard.domains.health.domain_logic.models import (  # noqa: E402
    BloodGroup,
    Gender,
    HealthRecord,
    SaltIntake,
    StressLevel,
)


def make_healthy_record() -> HealthRecord:
    """Normal BP, BMI 22, 8h sleep, low stress, active, good labs."""
    return HealthRecord(
        systolic=110,
        diastolic=70,
        heart_rate=68,
        bmi=22,
        cholesterol=180,
        blood_sugar=90,
        sleep_hours=8,
        stress_level=StressLevel.LOW,
        salt_intake=SaltIntake.LOW,
        physical_activity=True,
        family_history=False,
        height=175,
        weight=70,
        age=30,
        gender=Gender.MALE,
        parent_blood_group_1=BloodGroup.A,
        parent_blood_group_2=BloodGroup.B,
    )


class FixedRandom:
    """Deterministic stand-in for ``random.Random`` that cycles through values."""

    def __init__(self, *values: float) -> None:
        self._values = list(values) or [0.0]
        self._index = 0
        self.calls: list[tuple[float, float]] = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


@pytest.fixture
def healthy_record() -> HealthRecord:
    return make_healthy_record()


@pytest.fixture
def make_record() -> Callable[..., HealthRecord]:
    """Factory: healthy record with field overrides."""

    def _make(**overrides) -> HealthRecord:
        return replace(make_healthy_record(), **overrides)

    return _make


@pytest.fixture
def fixed_random() -> type[FixedRandom]:
    """The FixedRandom class, for tests that need a specific draw sequence."""
    return FixedRandom


@pytest.fixture
def zero_rng() -> FixedRandom:
    """Randomness source that always draws 0 (drift only)."""
    return FixedRandom(0.0)


# ---------------------------------------------------------------------------
# Storage fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def health_db():
    """Create an in-memory HealthDatabase for testing."""
    from pulseguard.core.storage.database import HealthDatabase

    db = HealthDatabase(":memory:")
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def record_cipher():
    """Create a RecordCipher with a fresh key."""
    from pulseguard.core.storage.encryption import RecordCipher

    return RecordCipher(RecordCipher.generate_key())


@pytest.fixture
def health_repository(health_db, record_cipher):
    """Create a HealthRepository backed by in-memory SQLite."""
    from pulseguard.core.storage.repository import HealthRepository

    return HealthRepository(health_db, record_cipher)


@pytest.fixture
def memory_store():
    from pulseguard.core.storage.store import InMemoryHealthStore

    return InMemoryHealthStore()
