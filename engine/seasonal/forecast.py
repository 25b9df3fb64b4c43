"""
Seasonal water level forecasting for the next two pre/post-monsoon seasons, using 5-year seasonal averages adjusted by the overall trend and the expected recharge between consecutive seasons.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from config import LEVEL_UNIT, Settings, settings
from engine.enums import Season
from engine.exceptions import InsufficientData, InvalidDate
from engine.seasonal.buckets import count_complete_cycles, extract_seasonal_data, seasonal_average
from engine.statistics.precision import round_half_up
from engine.validation.numeric import is_null_or_nan, type_name, validate_numeric_parameter
from engine.validation.quality import check_data_quality
from engine.validation.records import (
    HistoricalRecord,
    filter_invalid_historical_data,
    latest_water_level,
    validate_date,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeasonPrediction:
    season: str
    period: str
    predicted_level: float
    historical_average: float
    expected_recharge: float
    unit: str = LEVEL_UNIT


@dataclass(frozen=True)
class SeasonalForecast:
    methodology: str
    current_season: str
    next_season: SeasonPrediction
    following_season: SeasonPrediction
    confidence: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def upcoming_seasons(current: Season, year: int, count: int = 2) -> List[Tuple[Season, int]]:
    """The ``count`` seasons after ``current`` with their calendar years."""
    upcoming: List[Tuple[Season, int]] = []
    season = current
    for _ in range(count):
        following = season.opposite()
        # post-monsoon -> pre-monsoon crosses into the next calendar year
        if season is Season.post_monsoon and following is Season.pre_monsoon:
            year += 1
        upcoming.append((following, year))
        season = following
    return upcoming


def _validate_inputs(history: Any, current_date: Any, slope: Any, config: Settings) -> List[HistoricalRecord]:
    filtered = filter_invalid_historical_data(history)
    if filtered.invalid_count > 0:
        log.warning("Filtered %d invalid seasonal records", filtered.invalid_count)
    valid = filtered.valid_data

    quality = check_data_quality(valid, min_points=config.min_data_points, min_span_years=0.0, config=config)
    if not quality.is_valid:
        raise InsufficientData(
            "; ".join(quality.errors), found=len(valid), required=config.min_data_points
        )

    if not validate_date(current_date):
        raise InvalidDate(
            f"Invalid currentDate: Expected a valid Date object, received {type_name(current_date)}. "
            f"Pass a datetime.date such as date.today()."
        )

    if slope != 0:
        validate_numeric_parameter(slope, "slope")
    return valid


def predict_seasonal_levels(
    history: Any,
    current_date: Any,
    slope: Any = 0.0,
    config: Settings | None = None,
) -> SeasonalForecast:
    config = config or settings
    valid = _validate_inputs(history, current_date, slope, config)

    buckets = extract_seasonal_data(valid, config)
    cycles = count_complete_cycles(buckets)
    required = config.seasonal_min_cycles
    if cycles < required:
        raise InsufficientData(
            f"Insufficient seasonal data: Found {cycles} complete seasonal cycle(s), "
            f"{required} are required. A complete cycle requires both pre-monsoon "
            f"({Season.pre_monsoon.display_period}) and post-monsoon "
            f"({Season.post_monsoon.display_period}) readings in the same year.",
            found=cycles,
            required=required,
        )

    averages = {
        season: seasonal_average(records, config.seasonal_window_years, config)
        for season, records in buckets.items()
    }
    pre_avg, post_avg = averages[Season.pre_monsoon], averages[Season.post_monsoon]
    if is_null_or_nan(pre_avg) or is_null_or_nan(post_avg):
        raise InsufficientData(
            f"Unable to calculate seasonal averages. Pre: {pre_avg}, Post: {post_avg}",
            found=cycles,
            required=required,
        )

    current = Season.current_for_month(current_date.month, config)
    (next_season, next_year), (following_season, following_year) = upcoming_seasons(
        current, current_date.year
    )

    base_year = current_date.year
    offset = config.seasonal_mid_season_offset
    decimals = config.water_level_decimals
    # recharge uses the unrounded projections; only emitted levels are rounded
    next_level = averages[next_season] + slope * (next_year - base_year + offset)
    following_level = averages[following_season] + slope * (following_year - base_year + offset)

    previous = latest_water_level(valid)
    if previous is None:
        previous = averages[current]

    return SeasonalForecast(
        methodology=f"{config.seasonal_window_years}-year seasonal average with trend adjustment",
        current_season=current.value,
        next_season=SeasonPrediction(
            season=next_season.value,
            period=f"{next_season.display_period} {next_year}",
            predicted_level=round_half_up(next_level, decimals),
            historical_average=averages[next_season],
            # positive recharge: depth below ground decreased
            expected_recharge=round_half_up(previous - next_level, decimals),
        ),
        following_season=SeasonPrediction(
            season=following_season.value,
            period=f"{following_season.display_period} {following_year}",
            predicted_level=round_half_up(following_level, decimals),
            historical_average=averages[following_season],
            expected_recharge=round_half_up(next_level - following_level, decimals),
        ),
    )
