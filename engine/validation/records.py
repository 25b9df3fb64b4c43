"""
Sanitizing of raw groundwater history records: date parsing, water level checks and filtering of unusable records into fresh, normalized copies.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from engine.exceptions import TypeMismatch
from engine.validation.numeric import is_number, type_name

_MISSING = object()


@dataclass(frozen=True)
class HistoricalRecord:
    date: dt.date
    water_level: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "water_level": self.water_level}


@dataclass(frozen=True)
class FilterResult:
    valid_data: List[HistoricalRecord]
    invalid_count: int
    errors: List[str]


def validate_date(value: Any) -> bool:
    if not isinstance(value, dt.date):
        return False
    # NaT-style sentinels subclass datetime but never equal themselves
    return value == value


def parse_record_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not validate_date(value):
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date()
    return value


def ensure_history_sequence(history: Any) -> None:
    if not isinstance(history, (list, tuple)):
        raise TypeMismatch(
            f"Invalid history parameter: Expected an array of objects with date and "
            f"water_level fields, received {type_name(history)}. Please provide a list "
            f"such as [{{'date': '2024-01-15', 'water_level': 12.5}}]."
        )


def _field(record: Any, name: str, alias: Optional[str] = None) -> Any:
    if isinstance(record, HistoricalRecord):
        return getattr(record, name)
    if name in record:
        return record[name]
    if alias is not None and alias in record:
        return record[alias]
    return _MISSING


def filter_invalid_historical_data(history: Any) -> FilterResult:
    ensure_history_sequence(history)

    valid_data: List[HistoricalRecord] = []
    errors: List[str] = []

    for index, record in enumerate(history):
        if not isinstance(record, (Mapping, HistoricalRecord)):
            errors.append(f"Record {index} is not an object")
            continue

        raw_date = _field(record, "date")
        if raw_date is _MISSING or raw_date is None or raw_date == "":
            errors.append(f"Record {index} missing date")
            continue

        parsed = parse_record_date(raw_date)
        if parsed is None:
            errors.append(f"Record {index} invalid date: {raw_date!r}")
            continue

        level = _field(record, "water_level", "waterLevel")
        if level is _MISSING or level is None or (is_number(level) and math.isnan(level)):
            errors.append(f"Record {index} invalid water level: {None if level is _MISSING else level}")
            continue
        if not is_number(level):
            errors.append(f"Record {index} non-numeric water level: {level!r}")
            continue
        if not math.isfinite(level):
            errors.append(f"Record {index} infinite water level: {level}")
            continue

        valid_data.append(HistoricalRecord(date=parsed, water_level=float(level)))

    return FilterResult(valid_data=valid_data, invalid_count=len(errors), errors=errors)


def latest_water_level(records: List[HistoricalRecord]) -> Optional[float]:
    """Level of the most recent reading, or None for an empty history."""
    if not records:
        return None
    # latest date wins; among equal dates the later record in input order
    _, latest = max(enumerate(records), key=lambda pair: (pair[1].date, pair[0]))
    return latest.water_level
