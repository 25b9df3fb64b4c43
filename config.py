"""
Constants and configuration for Groundcast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from types import MappingProxyType
from typing import Mapping, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


GROUNDCAST_LOG_LEVEL = os.getenv("GROUNDCAST_LOG_LEVEL", "INFO").upper()

LEVEL_UNIT = "meters below ground level"

# keys of the per-category tables below; they match StressCategory values
SAFE = "Safe"
SEMI_CRITICAL = "Semi-critical"
CRITICAL = "Critical"
OVER_EXPLOITED = "Over-exploited"

# prediction keys used when the report service tags collected errors
FUTURE_WATER_LEVELS = "futureWaterLevels"
STRESS_CATEGORY_TRANSITION = "stressCategoryTransition"
SEASONAL_PREDICTIONS = "seasonalPredictions"


class Settings(BaseSettings):
    log_level: str = GROUNDCAST_LOG_LEVEL

    # rounding precision (decimal places) for emitted values
    water_level_decimals: int = 2
    decline_rate_decimals: int = 3
    transition_years_decimals: int = 1

    # forecast horizons, in whole years after the base date
    prediction_horizon_years: Tuple[int, ...] = (1, 2, 3, 5)

    # data quality gates
    min_data_points: int = 3
    min_span_years: float = 0.0
    days_per_year: float = 365.25

    # confidence classifier
    min_points_high_confidence: int = 20
    min_span_years_medium: float = 2.0
    min_span_years_high: float = 5.0
    r_squared_high: float = 0.7
    r_squared_medium: float = 0.5

    # decline rate (m/year) at which a category transitions to its successor
    stress_thresholds: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType({
            SAFE: 0.1,
            SEMI_CRITICAL: 0.5,
            CRITICAL: 1.0,
        })
    )
    # share of the current depth that must be lost before the next category
    stress_depth_increase: Mapping[str, float] = Field(
        default_factory=lambda: MappingProxyType({
            SAFE: 0.20,
            SEMI_CRITICAL: 0.30,
            CRITICAL: 0.40,
        })
    )
    stress_stable_threshold: float = 0.01
    stress_safe_stable_factor: float = 0.5
    stress_proximity_adjustment: float = 0.5
    stress_min_transition_years: float = 0.5
    stress_max_transition_years: float = 20.0
    stress_high_priority_years: float = 5.0

    # category classification from seasonal trend slopes
    stress_significant_slope: float = 0.1
    stress_over_exploited_slope: float = 0.5

    # seasonal buckets (calendar months); monsoon months fall in neither
    pre_monsoon_months: Tuple[int, ...] = (1, 2, 3, 4, 5)
    post_monsoon_months: Tuple[int, ...] = (10, 11, 12)
    seasonal_window_years: int = 5
    seasonal_min_cycles: int = 3
    seasonal_mid_season_offset: float = 0.5

    # seasonal forecast confidence, as (complete cycles, span years) minimums
    seasonal_high_confidence_cycles: int = 5
    seasonal_high_confidence_span_years: float = 5.0
    seasonal_medium_confidence_cycles: int = 3
    seasonal_medium_confidence_span_years: float = 3.0

    # stress transition confidence from the trend fit
    stress_r_squared_low: float = 0.5
    stress_r_squared_high: float = 0.7

    @field_validator("stress_thresholds", "stress_depth_increase", mode="after")
    @classmethod
    def _read_only_table(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(value))

    model_config = {
        "env_prefix": "GROUNDCAST_",
        "extra": "ignore",
        "frozen": True,
    }


settings = Settings()
