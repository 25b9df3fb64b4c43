"""
Forecasting logic for future water levels, extrapolating a fitted linear trend to fixed yearly horizons, together with the confidence classifier that grades a forecast from fit quality, data span and sample size.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.levels import DataRange, FutureLevelForecast, LevelPrediction, compute_future_water_levels
from engine.forecast.confidence import calculate_confidence

__all__ = ["DataRange", "FutureLevelForecast", "LevelPrediction", "compute_future_water_levels", "calculate_confidence"]
