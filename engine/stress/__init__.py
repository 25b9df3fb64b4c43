"""
Groundwater stress category logic: classification from trend slopes and estimation of the time until the next category.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.stress.classify import classify_stress_category
from engine.stress.transition import StressTransition, TransitionEstimate, predict_stress_category_transition

__all__ = ["StressTransition", "TransitionEstimate", "classify_stress_category", "predict_stress_category_transition"]
