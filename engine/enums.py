"""
Enumerations for Stress Categories, Seasons, Confidence Levels and Trends

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from config import Settings


class StressCategory(str, Enum):
    safe = "Safe"
    semi_critical = "Semi-critical"
    critical = "Critical"
    over_exploited = "Over-exploited"

    @property
    def rank(self) -> int:
        return list(StressCategory).index(self)

    @property
    def successor(self) -> Optional[StressCategory]:
        members = list(StressCategory)
        if self.rank + 1 < len(members):
            return members[self.rank + 1]
        return None

    def transition_threshold(self, config: Settings) -> Optional[float]:
        return config.stress_thresholds.get(self.value)


class Season(str, Enum):
    pre_monsoon = "pre-monsoon"
    post_monsoon = "post-monsoon"

    @property
    def display_period(self) -> str:
        if self is Season.pre_monsoon:
            return "January-May"
        return "October-December"

    def opposite(self) -> Season:
        if self is Season.pre_monsoon:
            return Season.post_monsoon
        return Season.pre_monsoon

    @classmethod
    def bucket_for_month(cls, month: int, config: Settings) -> Optional[Season]:
        # monsoon months belong to no bucket
        if month in config.pre_monsoon_months:
            return cls.pre_monsoon
        if month in config.post_monsoon_months:
            return cls.post_monsoon
        return None

    @classmethod
    def current_for_month(cls, month: int, config: Settings) -> Season:
        # monsoon months are reported as pre-monsoon by convention
        return cls.bucket_for_month(month, config) or cls.pre_monsoon


class ConfidenceLevel(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class Trend(str, Enum):
    improving = "improving"
    stable = "stable"
