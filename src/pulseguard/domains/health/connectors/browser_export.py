"""Import data saved by the PulseGuard browser dashboard.

The dashboard kept two local-storage keys: ``pulseguard_health_data`` (the
latest record) and ``pulseguard_progress`` (up to 30 records, each with an ISO
``date``). Records use camelCase keys. An export is either the progress list
on its own or an object holding both keys, whose values may themselves be
JSON strings (as local storage stores them).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pulseguard.domains.health.connectors.manual_entry import (
    RecordValidationError,
    build_health_record,
)
from pulseguard.domains.health.domain_logic.models import HealthRecord

logger = logging.getLogger(__name__)

CURRENT_RECORD_KEY = "pulseguard_health_data"
PROGRESS_KEY = "pulseguard_progress"

# Browser field name -> HealthRecord field name
_FIELD_MAP = {
    "systolic": "systolic",
    "diastolic": "diastolic",
    "heartRate": "heart_rate",
    "bmi": "bmi",
    "cholesterol": "cholesterol",
    "bloodSugar": "blood_sugar",
    "sleepHours": "sleep_hours",
    "stressLevel": "stress_level",
    "saltIntake": "salt_intake",
    "physicalActivity": "physical_activity",
    "familyHistory": "family_history",
    "height": "height",
    "gender": "gender",
    "weight": "weight",
    "age": "age",
    "parentBloodGroup1": "parent_blood_group_1",
    "parentBloodGroup2": "parent_blood_group_2",
}


@dataclass(frozen=True)
class BrowserExport:
    current: HealthRecord | None = None
    history: list[tuple[str, HealthRecord]] = field(default_factory=list)


def parse_browser_record(data: dict[str, Any]) -> HealthRecord:
    """Convert one camelCase dashboard record.

    Raises:
        RecordValidationError: If the record is not an object or fails validation.
    """
    if not isinstance(data, dict):
        raise RecordValidationError(f"Expected a record object, got {type(data).__name__}")
    fields = {snake: data[camel] for camel, snake in _FIELD_MAP.items() if camel in data}
    return build_health_record(**fields)


def _decode(value: Any, what: str) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise RecordValidationError(f"{what} is not valid JSON: {exc}") from exc
    return value


def _parse_history(items: Any) -> list[tuple[str, HealthRecord]]:
    if not isinstance(items, list):
        raise RecordValidationError("Progress history must be a list of records")
    history: list[tuple[str, HealthRecord]] = []
    for index, item in enumerate(items):
        try:
            record = parse_browser_record(item)
        except RecordValidationError as exc:
            raise RecordValidationError(f"Progress entry {index}: {exc}") from exc
        history.append((str(item.get("date", "")), record))
    return history


def parse_browser_export(text: str) -> BrowserExport:
    """Parse an exported progress list or local-storage snapshot.

    Raises:
        RecordValidationError: If the text is not valid JSON or any record
            fails validation.
    """
    payload = _decode(text, "Export")

    if isinstance(payload, list):
        export = BrowserExport(history=_parse_history(payload))
    elif isinstance(payload, dict):
        current_raw = payload.get(CURRENT_RECORD_KEY)
        progress_raw = payload.get(PROGRESS_KEY)
        if current_raw is None and progress_raw is None:
            raise RecordValidationError(
                f"Export has neither {CURRENT_RECORD_KEY!r} nor {PROGRESS_KEY!r}"
            )
        current = None
        if current_raw is not None:
            current = parse_browser_record(_decode(current_raw, CURRENT_RECORD_KEY))
        history = []
        if progress_raw is not None:
            history = _parse_history(_decode(progress_raw, PROGRESS_KEY))
        export = BrowserExport(current=current, history=history)
    else:
        raise RecordValidationError("Export must be a JSON list or object")

    logger.info(
        "Parsed browser export: current=%s, history=%d",
        export.current is not None,
        len(export.history),
    )
    return export
