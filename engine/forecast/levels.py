"""
Future water level forecasting, extrapolating the fitted linear trend to fixed yearly horizons after a base date.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from config import LEVEL_UNIT, Settings, settings
from engine.dates import add_years, as_date, iso
from engine.exceptions import InsufficientData, InvalidDate, NotFinite, TypeMismatch
from engine.statistics.precision import round_half_up
from engine.validation.numeric import is_number, type_name
from engine.validation.quality import check_data_quality, validate_regression_parameters
from engine.validation.records import filter_invalid_historical_data, validate_date

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelPrediction:
    year: int
    date: str
    predicted_level: float
    unit: str = LEVEL_UNIT


@dataclass(frozen=True)
class DataRange:
    start: str
    end: str


@dataclass(frozen=True)
class FutureLevelForecast:
    methodology: str
    data_range: DataRange
    predictions: List[LevelPrediction]
    confidence: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_future_water_levels(
    history: Any,
    slope: Any,
    intercept: Any,
    base_date: Any,
    config: Settings | None = None,
) -> FutureLevelForecast:
    config = config or settings

    filtered = filter_invalid_historical_data(history)
    if filtered.invalid_count > 0:
        log.warning("Filtered %d invalid records before forecasting", filtered.invalid_count)
    valid = filtered.valid_data

    quality = check_data_quality(valid, min_points=config.min_data_points, min_span_years=0.0, config=config)
    if not quality.is_valid:
        raise InsufficientData(
            "; ".join(quality.errors), found=len(valid), required=config.min_data_points
        )

    params = validate_regression_parameters(slope, intercept)
    if not params.is_valid:
        error_cls = NotFinite if is_number(slope) and is_number(intercept) else TypeMismatch
        raise error_cls(f"Invalid regression parameters: {'; '.join(params.errors)}")

    if not validate_date(base_date):
        raise InvalidDate(
            f"Invalid baseDate: Expected a valid Date object, received {type_name(base_date)}. "
            f"Pass a datetime.date such as date.today()."
        )
    base: date = as_date(base_date)

    predictions = [
        LevelPrediction(
            year=years,
            date=iso(add_years(base, years)),
            predicted_level=round_half_up(intercept + slope * years, config.water_level_decimals),
        )
        for years in config.prediction_horizon_years
    ]

    return FutureLevelForecast(
        methodology=f"Linear regression based on {len(valid)}-point historical trend",
        data_range=DataRange(start=quality.metrics.start_date, end=quality.metrics.end_date),
        predictions=predictions,
    )
