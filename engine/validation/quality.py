"""
Data quality gate for prediction inputs: point counts, data span, regression parameter checks and seasonal cycle completeness, reported as structured results instead of exceptions so callers can aggregate problems.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from config import Settings, settings
from engine.exceptions import TypeMismatch
from engine.validation.numeric import describe_invalid_number, is_number, type_name
from engine.validation.records import (
    HistoricalRecord,
    filter_invalid_historical_data,
    parse_record_date,
)


@dataclass(frozen=True)
class QualityMetrics:
    data_points: int = 0
    data_span_years: float = 0.0
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass(frozen=True)
class QualityCheck:
    is_valid: bool
    metrics: QualityMetrics
    errors: List[str]


@dataclass(frozen=True)
class ParameterCheck:
    is_valid: bool
    errors: List[str]


@dataclass(frozen=True)
class SeasonalCheck:
    is_valid: bool
    cycle_count: int
    errors: List[str]


@dataclass(frozen=True)
class ValidationOutcome:
    is_valid: bool
    valid_data: List[HistoricalRecord]
    errors: List[str]
    warnings: List[str] = field(default_factory=list)
    metrics: QualityMetrics = field(default_factory=QualityMetrics)


def insufficient_points_message(found: int, required: int) -> str:
    return (
        f"Insufficient data points: Found {found} record(s), {required} are required. "
        f"Please provide more historical measurements."
    )


def validate_regression_parameters(slope: Any, intercept: Any) -> ParameterCheck:
    errors = [
        reason
        for reason in (
            describe_invalid_number(slope, "slope"),
            describe_invalid_number(intercept, "intercept"),
        )
        if reason is not None
    ]
    return ParameterCheck(is_valid=not errors, errors=errors)


def _record_date(record: Any):
    if isinstance(record, HistoricalRecord):
        return record.date
    if isinstance(record, Mapping):
        return parse_record_date(record.get("date"))
    return None


def check_data_quality(
    data: Any,
    min_points: int | None = None,
    min_span_years: float | None = None,
    config: Settings | None = None,
) -> QualityCheck:
    config = config or settings
    if min_points is None:
        min_points = config.min_data_points
    if min_span_years is None:
        min_span_years = config.min_span_years

    if not isinstance(data, (list, tuple)):
        return QualityCheck(
            is_valid=False,
            metrics=QualityMetrics(),
            errors=[f"Invalid history: Expected array, received {type_name(data)}"],
        )

    errors: List[str] = []
    data_points = len(data)
    if data_points < min_points:
        errors.append(insufficient_points_message(data_points, min_points))

    span_years = 0.0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    if data_points > 0:
        dates = sorted(d for d in (_record_date(r) for r in data) if d is not None)
        if not dates:
            errors.append("No valid dates found")
        else:
            start_date = dates[0].isoformat()
            end_date = dates[-1].isoformat()
            span_years = (dates[-1] - dates[0]).days / config.days_per_year
            if span_years < min_span_years:
                errors.append(
                    f"Insufficient data span: {span_years:.2f} years, "
                    f"{min_span_years} are required"
                )

    metrics = QualityMetrics(
        data_points=data_points,
        data_span_years=span_years,
        start_date=start_date,
        end_date=end_date,
    )
    return QualityCheck(is_valid=not errors, metrics=metrics, errors=errors)


def validate_prediction_inputs(
    history: Any,
    slope: Any,
    intercept: Any,
    min_points: int | None = None,
    min_span_years: float | None = None,
    config: Settings | None = None,
) -> ValidationOutcome:
    errors: List[str] = []
    warnings: List[str] = []

    try:
        filtered = filter_invalid_historical_data(history)
    except TypeMismatch as exc:
        return ValidationOutcome(
            is_valid=False,
            valid_data=[],
            errors=[f"Failed to filter data: {exc}"],
            warnings=warnings,
        )
    if filtered.invalid_count > 0:
        warnings.append(f"Filtered {filtered.invalid_count} invalid records")

    params = validate_regression_parameters(slope, intercept)
    errors.extend(params.errors)

    quality = check_data_quality(filtered.valid_data, min_points, min_span_years, config)
    errors.extend(quality.errors)

    return ValidationOutcome(
        is_valid=not errors,
        valid_data=filtered.valid_data,
        errors=errors,
        warnings=warnings,
        metrics=quality.metrics,
    )


def _is_numeric_depth(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if is_number(value):
        return not math.isnan(value)
    if isinstance(value, str):
        try:
            return not math.isnan(float(value))
        except ValueError:
            return False
    return False


def _depth(entry: Any, name: str, alias: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name, entry.get(alias))
    return getattr(entry, name, None)


def validate_seasonal_data(recharge_pattern: Any, min_cycles: int | None = None,
                           config: Settings | None = None) -> SeasonalCheck:
    config = config or settings
    if min_cycles is None:
        min_cycles = config.seasonal_min_cycles

    if not isinstance(recharge_pattern, (list, tuple)):
        return SeasonalCheck(
            is_valid=False,
            cycle_count=0,
            errors=[f"Invalid rechargePattern: Expected array, received {type_name(recharge_pattern)}"],
        )

    complete = sum(
        1
        for entry in recharge_pattern
        if _is_numeric_depth(_depth(entry, "pre_monsoon_depth", "preMonsoonDepth"))
        and _is_numeric_depth(_depth(entry, "post_monsoon_depth", "postMonsoonDepth"))
    )

    errors: List[str] = []
    if complete < min_cycles:
        errors.append(f"Insufficient seasonal cycles: {complete} found, {min_cycles} required")
    return SeasonalCheck(is_valid=not errors, cycle_count=complete, errors=errors)
