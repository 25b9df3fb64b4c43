"""
Stress category classification from pre-monsoon, post-monsoon and overall trend slopes.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from config import Settings, settings
from engine.enums import StressCategory


def classify_stress_category(
    pre_monsoon_slope: Optional[float],
    post_monsoon_slope: Optional[float],
    overall_slope: float,
    config: Settings | None = None,
) -> StressCategory:
    config = config or settings
    cutoff = config.stress_significant_slope
    significant_pre = pre_monsoon_slope is not None and abs(pre_monsoon_slope) > cutoff
    significant_post = post_monsoon_slope is not None and abs(post_monsoon_slope) > cutoff

    if significant_pre and significant_post:
        if overall_slope > config.stress_over_exploited_slope:
            return StressCategory.over_exploited
        return StressCategory.critical
    if significant_pre or significant_post:
        return StressCategory.semi_critical
    return StressCategory.safe
