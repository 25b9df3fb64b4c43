"""
Half-up rounding used for every emitted water level, decline rate and transition estimate.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math


def round_half_up(value: float, decimals: int) -> float:
    # ties go towards +inf (2.5 -> 3, -2.5 -> -2), unlike the builtin round()
    multiplier = 10 ** decimals
    return math.floor(value * multiplier + 0.5) / multiplier
