"""
Response models for the forecast report assembled by the report service.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from engine.forecast.levels import FutureLevelForecast
from engine.seasonal.forecast import SeasonalForecast
from engine.stress.transition import StressTransition


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class IssueType(str, Enum):
    insufficient_data = "insufficient_data"
    computation_error = "computation_error"


class PredictionIssue(NpModel):

    type: IssueType
    message: str
    affected_predictions: List[str]


class TrendSummary(NpModel):

    slope: float
    intercept: float
    r_squared: Optional[float] = None


class ForecastReport(NpModel):

    as_of: date
    data_points: int
    invalid_records: int
    data_span_years: float = 0.0
    trend: Optional[TrendSummary] = None
    warnings: List[str] = Field(default_factory=list)
    future_water_levels: Optional[FutureLevelForecast] = None
    stress_category_transition: Optional[StressTransition] = None
    seasonal_predictions: Optional[SeasonalForecast] = None
    errors: List[PredictionIssue] = Field(default_factory=list)
