"""
Numeric parameter checks shared by the validators, statistics and predictors.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Optional

from engine.exceptions import NotFinite, TypeMismatch


def type_name(value: Any) -> str:
    if value is None:
        return "None"
    return type(value).__name__


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a measurement
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_valid_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def is_null_or_nan(value: Any) -> bool:
    return value is None or (is_number(value) and math.isnan(value))


def describe_invalid_number(value: Any, name: str) -> Optional[str]:
    """Short reason why ``value`` is not a finite number, or None when it is."""
    if value is None:
        return f"{name} is null or undefined"
    if not is_number(value):
        return f"{name} must be number, got {type_name(value)}"
    if math.isnan(value):
        return f"{name} is NaN"
    if not math.isfinite(value):
        return f"{name} is infinite"
    return None


def validate_numeric_parameter(value: Any, name: str) -> float:
    """Return ``value`` as a float or raise with a message explaining the fix.

    Raises :class:`TypeMismatch` for None and non-numeric values, and
    :class:`NotFinite` for NaN and infinities.
    """
    if value is None:
        raise TypeMismatch(
            f"Invalid {name}: Cannot be null or undefined. "
            f"Please provide a valid numeric value for {name}."
        )
    if not is_number(value):
        raise TypeMismatch(
            f"Invalid {name}: Expected number, received {type_name(value)} ({value!r}). "
            f"Please provide {name} as an int or float."
        )
    if math.isnan(value):
        raise NotFinite(
            f"Invalid {name}: Value is NaN (Not a Number), which typically results from "
            f"invalid mathematical operations such as 0/0 or parsing non-numeric text."
        )
    if not math.isfinite(value):
        raise NotFinite(
            f"Invalid {name}: Value must be finite, received {value}. Infinity values are "
            f"not allowed and usually indicate division by zero or numeric overflow."
        )
    return float(value)
