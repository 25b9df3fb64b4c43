"""
Confidence classification for forecasts from fit quality, data span and sample size.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any

from config import Settings, settings
from engine.enums import ConfidenceLevel
from engine.exceptions import RangeViolation
from engine.validation.numeric import validate_numeric_parameter
from engine.validation.records import filter_invalid_historical_data


def calculate_confidence(
    history: Any,
    r_squared: Any,
    data_span_years: Any,
    config: Settings | None = None,
) -> ConfidenceLevel:
    config = config or settings
    point_count = len(filter_invalid_historical_data(history).valid_data)

    r2 = validate_numeric_parameter(r_squared, "rSquared")
    if r2 < 0 or r2 > 1:
        raise RangeViolation(f"Invalid rSquared value: {r2} must be between 0 and 1")

    span = validate_numeric_parameter(data_span_years, "dataSpanYears")
    if span < 0:
        raise RangeViolation(f"Invalid dataSpanYears: {span} must be non-negative")

    # boundaries are exclusive: a value sitting exactly on a cutoff drops a tier
    sufficient = point_count >= config.min_points_high_confidence and span > config.min_span_years_medium
    if r2 > config.r_squared_high and span > config.min_span_years_high and sufficient:
        return ConfidenceLevel.high
    if r2 > config.r_squared_medium and span > config.min_span_years_medium:
        return ConfidenceLevel.medium
    return ConfidenceLevel.low
