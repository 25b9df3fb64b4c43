"""
Goodness-of-fit statistics (coefficient of determination and standard error) and the least-squares trend fit over time-normalized years.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np

from config import Settings, settings
from engine.exceptions import InsufficientData, NotFinite, RangeViolation, TypeMismatch
from engine.validation.numeric import is_null_or_nan, is_number
from engine.validation.records import HistoricalRecord


@dataclass(frozen=True)
class LinearTrend:
    slope: float
    intercept: float
    fitted: List[float]


def _as_pair(actual: Any, predicted: Any, min_points: int = 1) -> Tuple[np.ndarray, np.ndarray]:
    sequence_types = (list, tuple, np.ndarray)
    if not isinstance(actual, sequence_types) or not isinstance(predicted, sequence_types):
        raise TypeMismatch("Both actual and predicted must be arrays")
    if len(actual) == 0 or len(predicted) == 0:
        raise RangeViolation("Arrays cannot be empty")
    if len(actual) != len(predicted):
        raise RangeViolation(
            f"Actual and predicted arrays must have the same length "
            f"(received {len(actual)} and {len(predicted)})"
        )
    n = len(actual)
    if n < min_points:
        raise InsufficientData(
            f"Need at least {min_points} data points to calculate standard error, received {n}",
            found=n,
            required=min_points,
        )
    for label, values in (("actual", actual), ("predicted", predicted)):
        for i, value in enumerate(values):
            if is_null_or_nan(value) or not is_number(value):
                raise NotFinite(f"Invalid value in {label} array at index {i}: {value!r}")
    return np.asarray(actual, dtype=float), np.asarray(predicted, dtype=float)


def calculate_r_squared(actual: Sequence[float], predicted: Sequence[float]) -> float:
    a, p = _as_pair(actual, predicted)
    ss_res = float(np.sum((a - p) ** 2))
    ss_tot = float(np.sum((a - np.mean(a)) ** 2))
    # no variance to explain
    if ss_tot == 0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - ss_res / ss_tot))


def calculate_standard_error(actual: Sequence[float], predicted: Sequence[float]) -> float:
    # n - 2 degrees of freedom must be positive
    a, p = _as_pair(actual, predicted, min_points=3)
    n = len(a)
    ss_res = float(np.sum((a - p) ** 2))
    return math.sqrt(ss_res / (n - 2))


def linear_fit(history: Sequence[HistoricalRecord], config: Settings | None = None) -> LinearTrend:
    """Least-squares line of water level against years elapsed since the first record.

    ``history`` must already be filtered; the first record (in the given order)
    is the time origin, so ``intercept`` is the fitted level at that date.
    """
    config = config or settings
    if not history:
        raise InsufficientData(
            "Cannot fit a trend: Found 0 record(s), 1 are required.", found=0, required=1
        )

    origin = history[0].date
    t = np.array([(r.date - origin).days / config.days_per_year for r in history], dtype=float)
    v = np.array([r.water_level for r in history], dtype=float)

    if len(t) < 2 or float(np.sum((t - np.mean(t)) ** 2)) == 0:
        return LinearTrend(slope=0.0, intercept=float(np.mean(v)), fitted=[float(x) for x in v])

    slope, intercept = np.polyfit(t, v, 1)
    fitted = slope * t + intercept
    return LinearTrend(
        slope=float(slope),
        intercept=float(intercept),
        fitted=[float(x) for x in fitted],
    )
