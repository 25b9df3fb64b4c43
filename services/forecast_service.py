"""
Report service that runs validation and every predictor over one location's history, collecting predictor failures as tagged issues instead of aborting the whole report.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, List, Optional, Sequence

import numpy as np

from config import (
    FUTURE_WATER_LEVELS,
    SEASONAL_PREDICTIONS,
    STRESS_CATEGORY_TRANSITION,
    Settings,
    settings,
)
from engine.enums import ConfidenceLevel
from engine.exceptions import PredictionError, TypeMismatch
from engine.forecast import calculate_confidence, compute_future_water_levels
from engine.seasonal import RechargeCycle, build_recharge_pattern, predict_seasonal_levels
from engine.statistics import LinearTrend, calculate_r_squared, linear_fit
from engine.stress import classify_stress_category, predict_stress_category_transition
from engine.validation import (
    HistoricalRecord,
    ValidationOutcome,
    filter_invalid_historical_data,
    latest_water_level,
    validate_prediction_inputs,
    validate_seasonal_data,
)
from services.responses import ForecastReport, IssueType, PredictionIssue, TrendSummary

log = logging.getLogger(__name__)


def _issue(kind: IssueType, message: str, affected: str) -> PredictionIssue:
    return PredictionIssue(type=kind, message=message, affected_predictions=[affected])


def _season_slope(pattern: Sequence[RechargeCycle], attr: str) -> Optional[float]:
    if len(pattern) < 2:
        return None
    years = np.array([c.year for c in pattern], dtype=float)
    depths = np.array([getattr(c, attr) for c in pattern], dtype=float)
    slope, _ = np.polyfit(years, depths, 1)
    return float(slope)


def _stress_confidence(r_squared: Optional[float], config: Settings) -> ConfidenceLevel:
    if r_squared is None or r_squared < config.stress_r_squared_low:
        return ConfidenceLevel.low
    if r_squared > config.stress_r_squared_high:
        return ConfidenceLevel.high
    return ConfidenceLevel.medium


def _seasonal_confidence(cycles: int, span_years: float, config: Settings) -> ConfidenceLevel:
    if cycles >= config.seasonal_high_confidence_cycles and span_years >= config.seasonal_high_confidence_span_years:
        return ConfidenceLevel.high
    if cycles >= config.seasonal_medium_confidence_cycles and span_years >= config.seasonal_medium_confidence_span_years:
        return ConfidenceLevel.medium
    return ConfidenceLevel.low


def _future_levels(report: ForecastReport, outcome: ValidationOutcome, trend: Optional[LinearTrend],
                   r_squared: Optional[float], as_of: date, config: Settings) -> None:
    if not outcome.is_valid or trend is None or r_squared is None:
        report.errors.append(_issue(
            IssueType.insufficient_data,
            f"Insufficient historical data for future water level predictions "
            f"(minimum {config.min_data_points} points required)",
            FUTURE_WATER_LEVELS,
        ))
        return
    try:
        forecast = compute_future_water_levels(
            outcome.valid_data, trend.slope, trend.intercept, as_of, config=config
        )
        confidence = calculate_confidence(
            outcome.valid_data, r_squared, outcome.metrics.data_span_years, config=config
        )
    except PredictionError as exc:
        log.error("Future prediction error: %s", exc)
        report.errors.append(_issue(
            IssueType.computation_error,
            f"Failed to compute future water levels: {exc}",
            FUTURE_WATER_LEVELS,
        ))
        return
    report.future_water_levels = dataclasses.replace(forecast, confidence=confidence.value)


def _stress_transition(report: ForecastReport, outcome: ValidationOutcome, trend: Optional[LinearTrend],
                       r_squared: Optional[float], pattern: List[RechargeCycle], category: Any,
                       current_water_level: Any, as_of: date, config: Settings) -> None:
    records = outcome.valid_data
    if current_water_level is None:
        current_water_level = latest_water_level(records)
    if not outcome.is_valid or trend is None or current_water_level is None:
        message = (
            f"Data validation failed: {'; '.join(outcome.errors)}"
            if not outcome.is_valid
            else "Unable to predict stress category transition - missing required data"
        )
        report.errors.append(_issue(IssueType.insufficient_data, message, STRESS_CATEGORY_TRANSITION))
        return

    if category is None:
        category = classify_stress_category(
            _season_slope(pattern, "pre_monsoon_depth"),
            _season_slope(pattern, "post_monsoon_depth"),
            trend.slope,
            config=config,
        )
    try:
        result = predict_stress_category_transition(
            category, abs(trend.slope), current_water_level, today=as_of, config=config
        )
    except PredictionError as exc:
        log.error("Stress prediction error: %s", exc)
        report.errors.append(_issue(
            IssueType.computation_error,
            f"Failed to compute stress category transition: {exc}",
            STRESS_CATEGORY_TRANSITION,
        ))
        return
    confidence = _stress_confidence(r_squared, config)
    report.stress_category_transition = dataclasses.replace(result, confidence=confidence.value)


def _seasonal(report: ForecastReport, outcome: ValidationOutcome, trend: Optional[LinearTrend],
              pattern: List[RechargeCycle], as_of: date, config: Settings) -> None:
    check = validate_seasonal_data(pattern, config.seasonal_min_cycles, config=config)
    if not outcome.is_valid or not check.is_valid or trend is None:
        reasons = check.errors + ([] if outcome.is_valid else outcome.errors)
        message = "; ".join(reasons) or (
            f"Insufficient seasonal data for predictions "
            f"(minimum {config.seasonal_min_cycles} complete years required)"
        )
        report.errors.append(_issue(IssueType.insufficient_data, message, SEASONAL_PREDICTIONS))
        return
    try:
        result = predict_seasonal_levels(outcome.valid_data, as_of, trend.slope, config=config)
    except PredictionError as exc:
        log.error("Seasonal prediction error: %s", exc)
        report.errors.append(_issue(
            IssueType.computation_error,
            f"Failed to compute seasonal predictions: {exc}",
            SEASONAL_PREDICTIONS,
        ))
        return
    confidence = _seasonal_confidence(check.cycle_count, outcome.metrics.data_span_years, config)
    report.seasonal_predictions = dataclasses.replace(result, confidence=confidence.value)


def build_forecast_report(
    history: Any,
    as_of: date,
    current_water_level: Any = None,
    category: Any = None,
    config: Settings | None = None,
) -> ForecastReport:
    """Run every predictor over ``history`` and gather the results in one report.

    Predictor failures never abort the report; each one becomes a
    :class:`PredictionIssue` naming the prediction it affects. Only
    unexpected (non-engine) exceptions propagate.
    """
    config = config or settings

    try:
        filtered = filter_invalid_historical_data(history)
        records: List[HistoricalRecord] = filtered.valid_data
        invalid = filtered.invalid_count
    except TypeMismatch:
        records, invalid = [], 0

    trend = linear_fit(records, config) if len(records) >= config.min_data_points else None
    slope = trend.slope if trend else 0.0
    intercept = trend.intercept if trend else 0.0

    outcome = validate_prediction_inputs(
        history, slope, intercept, min_points=config.min_data_points, config=config
    )
    if not outcome.is_valid:
        log.warning("Prediction validation failed: %s", "; ".join(outcome.errors))
    elif invalid:
        log.info("Validated %d/%d records", len(outcome.valid_data), len(history))

    r_squared = None
    if trend is not None and outcome.is_valid:
        r_squared = calculate_r_squared([r.water_level for r in outcome.valid_data], trend.fitted)

    report = ForecastReport(
        as_of=as_of,
        data_points=len(records),
        invalid_records=invalid,
        data_span_years=outcome.metrics.data_span_years,
        trend=TrendSummary(slope=slope, intercept=intercept, r_squared=r_squared) if trend else None,
        warnings=list(outcome.warnings),
    )

    pattern = build_recharge_pattern(records, config)
    _future_levels(report, outcome, trend, r_squared, as_of, config)
    _stress_transition(report, outcome, trend, r_squared, pattern, category,
                       current_water_level, as_of, config)
    _seasonal(report, outcome, trend, pattern, as_of, config)
    return report
