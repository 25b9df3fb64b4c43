"""
Test cases for the confidence classifier, including exclusive tier boundaries, sample size requirements and input range checks.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from config import settings
from engine.enums import ConfidenceLevel
from engine.exceptions import NotFinite, RangeViolation, TypeMismatch
from engine.forecast import calculate_confidence


def test_high_confidence(long_history):
    assert calculate_confidence(long_history, 0.8, 6) == ConfidenceLevel.high
    assert calculate_confidence(long_history, 0.8, 6) == "high"


@pytest.mark.parametrize(
    "r_squared, span, expected",
    [
        (0.7, 6, ConfidenceLevel.medium),   # r2 boundary is exclusive
        (0.8, 5, ConfidenceLevel.medium),   # span boundary is exclusive
        (0.5, 6, ConfidenceLevel.low),
        (0.6, 2, ConfidenceLevel.low),
        (0.6, 2.5, ConfidenceLevel.medium),
        (0.0, 0, ConfidenceLevel.low),
        (1.0, 30, ConfidenceLevel.high),
    ],
)
def test_tier_boundaries(long_history, r_squared, span, expected):
    assert calculate_confidence(long_history, r_squared, span) == expected


def test_never_high_below_twenty_points(long_history):
    assert calculate_confidence(long_history[:19], 0.99, 10) == ConfidenceLevel.medium


def test_invalid_records_do_not_count(long_history):
    history = long_history[:19] + [{"date": "2024-01-01", "water_level": None}]
    assert calculate_confidence(history, 0.99, 10) == ConfidenceLevel.medium


def test_threshold_override(long_history):
    strict = settings.model_copy(update={"r_squared_high": 0.9})
    assert calculate_confidence(long_history, 0.85, 6, config=strict) == ConfidenceLevel.medium


def test_input_errors(long_history):
    with pytest.raises(TypeError, match="Invalid history parameter.*Expected an array"):
        calculate_confidence(None, 0.8, 5)
    with pytest.raises(TypeMismatch, match="rSquared"):
        calculate_confidence(long_history, "invalid", 5)
    with pytest.raises(NotFinite, match="rSquared"):
        calculate_confidence(long_history, math.nan, 5)
    with pytest.raises(NotFinite, match="dataSpanYears"):
        calculate_confidence(long_history, 0.8, math.nan)
    with pytest.raises(RangeViolation, match="Invalid rSquared value.*must be between 0 and 1"):
        calculate_confidence(long_history, 1.5, 5)
    with pytest.raises(RangeViolation, match="Invalid rSquared value.*must be between 0 and 1"):
        calculate_confidence(long_history, -0.1, 5)
    with pytest.raises(RangeViolation, match="Invalid dataSpanYears.*must be non-negative"):
        calculate_confidence(long_history, 0.8, -1)
