"""
Stress category transition estimation, projecting when a location moves to the next groundwater stress category from its current decline rate, the distance to that category's threshold and the current depth.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional

from config import Settings, settings
from engine.dates import add_months, add_years, iso
from engine.enums import StressCategory, Trend
from engine.exceptions import InvalidCategory, TypeMismatch
from engine.statistics.precision import round_half_up
from engine.validation.numeric import type_name, validate_numeric_parameter


@dataclass(frozen=True)
class TransitionEstimate:
    next_category: Optional[str]
    years_until_transition: Optional[float]
    estimated_transition_date: Optional[str]
    message: Optional[str] = None
    trend: Optional[str] = None
    warning: Optional[str] = None


@dataclass(frozen=True)
class StressTransition:
    current_category: str
    current_decline_rate: float
    thresholds: Dict[str, Dict[str, float]]
    predictions: TransitionEstimate
    confidence: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _category_type_error(value: Any) -> TypeMismatch:
    return TypeMismatch(
        f"Invalid currentCategory type: Expected string, received {type_name(value)}"
    )


def parse_category(value: Any) -> StressCategory:
    if not isinstance(value, str):
        raise _category_type_error(value)
    name = value.strip()
    for category in StressCategory:
        if category.value == name:
            return category
    raise InvalidCategory(
        f"Invalid stress category: {value!r}. Expected one of: "
        f"{', '.join(c.value for c in StressCategory)}"
    )


def threshold_table(config: Settings) -> Dict[str, Dict[str, float]]:
    table: Dict[str, Dict[str, float]] = {}
    for category in StressCategory:
        threshold = category.transition_threshold(config)
        if threshold is not None:
            table[category.value] = {"max": threshold}
    # the top category starts where the one below it ends
    table[StressCategory.over_exploited.value] = {
        "min": StressCategory.critical.transition_threshold(config)
    }
    return table


def _format_rate(value: float) -> str:
    # whole rates print without a trailing ".0"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _no_transition(message: str, trend: Optional[Trend] = None) -> TransitionEstimate:
    return TransitionEstimate(
        next_category=None,
        years_until_transition=None,
        estimated_transition_date=None,
        message=message,
        trend=trend.value if trend else None,
    )


def _estimate_years(category: StressCategory, rate: float, level: float, threshold: float,
                    config: Settings) -> float:
    rate_gap = threshold - rate
    depth_increase = level * config.stress_depth_increase[category.value]
    years = depth_increase / rate

    # closer to the threshold means a faster transition
    proximity = 1 - (rate_gap / threshold)
    years = years * (1 - proximity * config.stress_proximity_adjustment)

    years = max(config.stress_min_transition_years, years)
    years = min(config.stress_max_transition_years, years)
    return round_half_up(years, config.transition_years_decimals)


def predict_stress_category_transition(
    current_category: Any,
    annual_decline_rate: Any,
    current_water_level: Any,
    today: date | None = None,
    config: Settings | None = None,
) -> StressTransition:
    config = config or settings
    if not isinstance(current_category, str):
        raise _category_type_error(current_category)
    rate = validate_numeric_parameter(annual_decline_rate, "annualDeclineRate")
    level = validate_numeric_parameter(current_water_level, "currentWaterLevel")
    category = parse_category(current_category)
    today = today or date.today()

    def respond(estimate: TransitionEstimate) -> StressTransition:
        return StressTransition(
            current_category=category.value,
            current_decline_rate=round_half_up(rate, config.decline_rate_decimals),
            thresholds=threshold_table(config),
            predictions=estimate,
        )

    next_category = category.successor
    if next_category is None:
        return respond(_no_transition(
            "Maximum stress level reached - no further category transition possible"
        ))

    if rate < 0:
        return respond(_no_transition("Improving conditions - water levels are rising", Trend.improving))

    if abs(rate) < config.stress_stable_threshold:
        return respond(_no_transition("Stable conditions - minimal water level change", Trend.stable))

    threshold = category.transition_threshold(config)
    if category is StressCategory.safe and rate < threshold * config.stress_safe_stable_factor:
        return respond(_no_transition(
            "Stable conditions - decline rate below transition threshold", Trend.stable
        ))

    if rate >= threshold:
        shown_rate = _format_rate(round_half_up(rate, config.decline_rate_decimals))
        return respond(TransitionEstimate(
            next_category=next_category.value,
            years_until_transition=0.0,
            estimated_transition_date=iso(today),
            message=(
                f"Current decline rate ({shown_rate} m/year) already exceeds "
                f"{next_category.value} threshold ({_format_rate(threshold)} m/year)"
            ),
            warning="Immediate action required - threshold already exceeded",
        ))

    years = _estimate_years(category, rate, level, threshold, config)
    whole_years = math.floor(years)
    remaining_months = math.floor((years % 1) * 12 + 0.5)
    transition_date = add_months(add_years(today, whole_years), remaining_months)

    warning = None
    if years <= config.stress_high_priority_years:
        warning = "High priority - transition expected within 5 years"

    return respond(TransitionEstimate(
        next_category=next_category.value,
        years_until_transition=years,
        estimated_transition_date=iso(transition_date),
        warning=warning,
    ))
