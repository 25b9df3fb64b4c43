"""
Test cases for the forecast report service, covering the assembled report, derived stress category, confidence tagging and per-prediction issue collection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date

from config import settings
from services.forecast_service import build_forecast_report
from services.responses import ForecastReport, IssueType

AS_OF = date(2023, 1, 15)


def test_full_report(seasonal_history):
    report = build_forecast_report(seasonal_history, AS_OF, category="Semi-critical")
    assert report.errors == []
    assert report.data_points == 6
    assert report.invalid_records == 0
    assert report.trend is not None
    assert 0.0 <= report.trend.r_squared <= 1.0

    future = report.future_water_levels
    assert [p.year for p in future.predictions] == [1, 2, 3, 5]
    assert future.predictions[0].date == "2024-01-15"
    assert future.confidence in {"high", "medium", "low"}

    stress = report.stress_category_transition
    assert stress.current_category == "Semi-critical"
    assert stress.confidence == "low"

    seasonal = report.seasonal_predictions
    assert seasonal.current_season == "pre-monsoon"
    assert seasonal.next_season.period == "October-December 2023"
    assert seasonal.next_season.historical_average == 10.5
    # three cycles over less than three years
    assert seasonal.confidence == "low"


def test_category_is_derived_when_omitted(seasonal_history):
    report = build_forecast_report(seasonal_history, AS_OF)
    stress = report.stress_category_transition
    # both seasons deepen by 0.5 m/year while the overall trend is flat
    assert stress.current_category == "Critical"
    assert stress.predictions.trend == "stable"


def test_current_level_override(seasonal_history):
    report = build_forecast_report(seasonal_history, AS_OF, current_water_level=42.0, category="Safe")
    assert report.stress_category_transition is not None
    assert report.errors == []


def test_current_level_defaults_to_latest_reading():
    rows = [
        {"date": "2020-01-01", "water_level": 10.0},
        {"date": "2021-01-01", "water_level": 10.2},
        {"date": "2022-01-01", "water_level": 10.4},
    ]
    in_order = build_forecast_report(rows, AS_OF, category="Semi-critical")
    newest_first = build_forecast_report(rows[::-1], AS_OF, category="Semi-critical")
    pinned = build_forecast_report(rows, AS_OF, current_water_level=10.4, category="Semi-critical")

    years = in_order.stress_category_transition.predictions.years_until_transition
    assert years == 12.5
    assert newest_first.stress_category_transition.predictions.years_until_transition == years
    assert pinned.stress_category_transition.predictions.years_until_transition == years


def test_short_history_reports_every_prediction(three_points):
    report = build_forecast_report(three_points[:2], AS_OF)
    assert report.trend is None
    assert report.future_water_levels is None
    assert report.stress_category_transition is None
    assert report.seasonal_predictions is None
    assert [e.type for e in report.errors] == [IssueType.insufficient_data] * 3
    assert [e.affected_predictions for e in report.errors] == [
        ["futureWaterLevels"],
        ["stressCategoryTransition"],
        ["seasonalPredictions"],
    ]
    assert "minimum 3 points required" in report.errors[0].message
    assert report.errors[1].message.startswith("Data validation failed")


def test_non_seasonal_history_keeps_other_predictions(three_points):
    report = build_forecast_report(three_points, date(2024, 6, 1), category="Safe")
    assert report.future_water_levels is not None
    assert report.stress_category_transition is not None
    assert report.seasonal_predictions is None
    assert len(report.errors) == 1
    assert report.errors[0].affected_predictions == ["seasonalPredictions"]
    assert "Insufficient seasonal cycles" in report.errors[0].message


def test_invalid_category_is_a_computation_error(seasonal_history):
    report = build_forecast_report(seasonal_history, AS_OF, category="Bogus")
    assert report.stress_category_transition is None
    assert report.future_water_levels is not None
    assert report.seasonal_predictions is not None
    assert len(report.errors) == 1
    assert report.errors[0].type == IssueType.computation_error
    assert report.errors[0].affected_predictions == ["stressCategoryTransition"]
    assert "Invalid stress category" in report.errors[0].message


def test_invalid_records_are_counted(seasonal_history):
    rows = seasonal_history + [{"date": "bad", "water_level": 1.0}, {"water_level": 2.0}]
    report = build_forecast_report(rows, AS_OF, category="Safe")
    assert report.data_points == 6
    assert report.invalid_records == 2
    assert report.warnings == ["Filtered 2 invalid records"]


def test_non_list_history():
    report = build_forecast_report("not a list", AS_OF)
    assert report.data_points == 0
    assert len(report.errors) == 3


def test_config_override(seasonal_history):
    strict = settings.model_copy(update={"seasonal_min_cycles": 4})
    report = build_forecast_report(seasonal_history, AS_OF, category="Safe", config=strict)
    assert report.seasonal_predictions is None
    assert report.errors[0].affected_predictions == ["seasonalPredictions"]


def test_report_json_round_trip(seasonal_history):
    report = build_forecast_report(seasonal_history, AS_OF, category="Critical")
    assert ForecastReport.model_validate_json(report.model_dump_json()) == report
