"""
Statistics primitives for prediction quality: R², standard error, trend fitting and rounding.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.statistics.fit import LinearTrend, calculate_r_squared, calculate_standard_error, linear_fit
from engine.statistics.precision import round_half_up

__all__ = ["LinearTrend", "calculate_r_squared", "calculate_standard_error", "linear_fit", "round_half_up"]
