"""
Test cases for seasonal forecasting: bucketing, cycle counting, windowed averages, recharge patterns, season rollover and input errors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json
import math
from datetime import date

import pytest

from engine.enums import Season
from engine.exceptions import InsufficientData, InvalidDate, NotFinite, TypeMismatch
from engine.seasonal import (
    RechargeCycle,
    build_recharge_pattern,
    count_complete_cycles,
    extract_seasonal_data,
    predict_seasonal_levels,
    seasonal_average,
)
from engine.validation import filter_invalid_historical_data


def records(rows):
    return filter_invalid_historical_data(rows).valid_data


def test_buckets_skip_monsoon_months(seasonal_history):
    rows = seasonal_history + [{"date": "2021-07-01", "water_level": 4.0}]
    buckets = extract_seasonal_data(records(rows))
    assert len(buckets[Season.pre_monsoon]) == 3
    assert len(buckets[Season.post_monsoon]) == 3
    assert count_complete_cycles(buckets) == 3


def test_cycle_needs_both_seasons_in_same_year():
    rows = [
        {"date": "2020-03-01", "water_level": 10.0},
        {"date": "2021-11-01", "water_level": 9.0},
        {"date": "2022-02-01", "water_level": 10.5},
        {"date": "2022-12-01", "water_level": 9.5},
    ]
    assert count_complete_cycles(extract_seasonal_data(records(rows))) == 1


def test_seasonal_average_window(make_seasonal):
    rows = make_seasonal([50.0], [40.0], start_year=2010) + make_seasonal(
        [12.0, 12.5, 13.0], [10.0, 10.5, 11.0]
    )
    buckets = extract_seasonal_data(records(rows))
    assert seasonal_average(buckets[Season.pre_monsoon], 5) == 12.5
    assert seasonal_average(buckets[Season.post_monsoon], 5) == 10.5
    assert seasonal_average(buckets[Season.pre_monsoon], 20) == pytest.approx(21.88)
    assert seasonal_average([], 5) is None


def test_recharge_pattern(seasonal_history):
    extra = [{"date": "2021-01-10", "water_level": 13.5}]
    pattern = build_recharge_pattern(records(seasonal_history + extra))
    assert pattern[0] == RechargeCycle(year=2020, pre_monsoon_depth=12.0, post_monsoon_depth=10.0, recharge_amount=2.0)
    assert pattern[1] == RechargeCycle(year=2021, pre_monsoon_depth=13.0, post_monsoon_depth=10.5, recharge_amount=2.5)
    assert [c.year for c in pattern] == [2020, 2021, 2022]


def test_predict_without_trend(seasonal_history):
    res = predict_seasonal_levels(seasonal_history, date(2023, 1, 15))
    assert res.methodology == "5-year seasonal average with trend adjustment"
    assert res.current_season == "pre-monsoon"

    assert res.next_season.season == "post-monsoon"
    assert res.next_season.period == "October-December 2023"
    assert res.next_season.predicted_level == 10.5
    assert res.next_season.historical_average == 10.5
    assert res.next_season.expected_recharge == 0.5

    assert res.following_season.season == "pre-monsoon"
    assert res.following_season.period == "January-May 2024"
    assert res.following_season.predicted_level == 12.5
    assert res.following_season.expected_recharge == -2.0
    assert res.following_season.unit == "meters below ground level"


def test_predict_with_trend(seasonal_history):
    res = predict_seasonal_levels(seasonal_history, date(2023, 1, 15), 0.5)
    assert res.next_season.predicted_level == 10.75
    assert res.next_season.historical_average == 10.5
    assert res.next_season.expected_recharge == 0.25
    assert res.following_season.predicted_level == 13.25
    assert res.following_season.expected_recharge == -2.5


def test_recharge_uses_unrounded_projection(make_seasonal):
    rows = make_seasonal([12.0, 12.5, 13.0], [10.0, 10.5, 11.003])
    res = predict_seasonal_levels(rows, date(2023, 1, 15), 0.012)
    # projected 10.506 is shown as 10.51, recharge is 11.003 - 10.506
    assert res.next_season.predicted_level == 10.51
    assert res.next_season.expected_recharge == 0.5


def test_post_monsoon_rolls_into_next_year(seasonal_history):
    res = predict_seasonal_levels(seasonal_history, date(2023, 11, 20))
    assert res.current_season == "post-monsoon"
    assert res.next_season.period == "January-May 2024"
    assert res.following_season.period == "October-December 2024"


def test_monsoon_month_counts_as_pre_monsoon(seasonal_history):
    res = predict_seasonal_levels(seasonal_history, date(2023, 7, 10))
    assert res.current_season == "pre-monsoon"
    assert res.next_season.period == "October-December 2023"
    assert res.following_season.period == "January-May 2024"


def test_old_readings_fall_outside_window(seasonal_history, make_seasonal):
    rows = make_seasonal([50.0], [40.0], start_year=2010) + seasonal_history
    res = predict_seasonal_levels(rows, date(2023, 1, 15))
    assert res.next_season.historical_average == 10.5
    assert res.following_season.historical_average == 12.5


def test_serializable(seasonal_history):
    payload = predict_seasonal_levels(seasonal_history, date(2023, 1, 15), -0.13).to_dict()
    assert json.loads(json.dumps(payload)) == payload


def test_too_few_cycles(make_seasonal):
    with pytest.raises(InsufficientData, match="Found 2 complete seasonal cycle\\(s\\), 3 are required") as exc:
        predict_seasonal_levels(make_seasonal([12.0, 12.5], [10.0, 10.5]), date(2023, 1, 15))
    assert "January-May" in str(exc.value)
    assert "October-December" in str(exc.value)
    assert exc.value.found == 2


def test_too_few_points(three_points):
    with pytest.raises(InsufficientData, match="Insufficient data points"):
        predict_seasonal_levels(three_points[:2], date(2024, 6, 1))


@pytest.mark.parametrize("current_date", ["2023-01-15", None, 1700000000])
def test_invalid_current_date(seasonal_history, current_date):
    with pytest.raises(InvalidDate, match="Invalid currentDate"):
        predict_seasonal_levels(seasonal_history, current_date)


def test_invalid_slope(seasonal_history):
    with pytest.raises(TypeMismatch, match="Invalid slope"):
        predict_seasonal_levels(seasonal_history, date(2023, 1, 15), "steep")
    with pytest.raises(NotFinite, match="Invalid slope"):
        predict_seasonal_levels(seasonal_history, date(2023, 1, 15), math.nan)
