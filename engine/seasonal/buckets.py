"""
Seasonal bucketing of validated history into pre-monsoon and post-monsoon readings, complete cycle counting, windowed seasonal averages and the per-year recharge pattern.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from config import Settings, settings
from engine.dates import add_years
from engine.enums import Season
from engine.statistics.precision import round_half_up
from engine.validation.records import HistoricalRecord


@dataclass(frozen=True)
class SeasonalRecord:
    year: int
    water_level: float
    date: date


@dataclass(frozen=True)
class RechargeCycle:
    year: int
    pre_monsoon_depth: float
    post_monsoon_depth: float
    recharge_amount: float


def extract_seasonal_data(
    history: Sequence[HistoricalRecord], config: Settings | None = None
) -> Dict[Season, List[SeasonalRecord]]:
    config = config or settings
    buckets: Dict[Season, List[SeasonalRecord]] = {season: [] for season in Season}
    for record in history:
        season = Season.bucket_for_month(record.date.month, config)
        if season is None:
            continue
        buckets[season].append(
            SeasonalRecord(year=record.date.year, water_level=record.water_level, date=record.date)
        )
    return buckets


def count_complete_cycles(buckets: Dict[Season, List[SeasonalRecord]]) -> int:
    pre_years = {r.year for r in buckets[Season.pre_monsoon]}
    post_years = {r.year for r in buckets[Season.post_monsoon]}
    return len(pre_years & post_years)


def seasonal_average(records: Sequence[SeasonalRecord], window_years: int,
                     config: Settings | None = None) -> Optional[float]:
    """Mean level of the readings within ``window_years`` of the latest one."""
    config = config or settings
    if not records:
        return None

    ordered = sorted(records, key=lambda r: r.date, reverse=True)
    cutoff = add_years(ordered[0].date, -window_years)
    window = [r for r in ordered if r.date >= cutoff]
    if not window:
        return None
    return round_half_up(sum(r.water_level for r in window) / len(window), config.water_level_decimals)


def build_recharge_pattern(
    history: Sequence[HistoricalRecord], config: Settings | None = None
) -> List[RechargeCycle]:
    config = config or settings
    buckets = extract_seasonal_data(history, config)

    per_year: Dict[Season, Dict[int, List[float]]] = {season: {} for season in Season}
    for season, records in buckets.items():
        for r in records:
            per_year[season].setdefault(r.year, []).append(r.water_level)

    pattern: List[RechargeCycle] = []
    pre, post = per_year[Season.pre_monsoon], per_year[Season.post_monsoon]
    for year in sorted(set(pre) & set(post)):
        pre_depth = sum(pre[year]) / len(pre[year])
        post_depth = sum(post[year]) / len(post[year])
        decimals = config.water_level_decimals
        pattern.append(RechargeCycle(
            year=year,
            pre_monsoon_depth=round_half_up(pre_depth, decimals),
            post_monsoon_depth=round_half_up(post_depth, decimals),
            recharge_amount=round_half_up(pre_depth - post_depth, decimals),
        ))
    return pattern
