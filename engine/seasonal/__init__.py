"""
Seasonal (pre/post-monsoon) forecasting: bucketing, windowed averages, recharge patterns and next-season projections.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.seasonal.buckets import (
    RechargeCycle,
    SeasonalRecord,
    build_recharge_pattern,
    count_complete_cycles,
    extract_seasonal_data,
    seasonal_average,
)
from engine.seasonal.forecast import SeasonPrediction, SeasonalForecast, predict_seasonal_levels

__all__ = [
    "RechargeCycle",
    "SeasonPrediction",
    "SeasonalForecast",
    "SeasonalRecord",
    "build_recharge_pattern",
    "count_complete_cycles",
    "extract_seasonal_data",
    "predict_seasonal_levels",
    "seasonal_average",
]
