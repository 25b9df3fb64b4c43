"""
Input validation and the data quality gate run ahead of every predictor.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.validation.numeric import (
    is_null_or_nan,
    is_valid_number,
    validate_numeric_parameter,
)
from engine.validation.records import (
    FilterResult,
    HistoricalRecord,
    filter_invalid_historical_data,
    latest_water_level,
    validate_date,
)
from engine.validation.quality import (
    QualityCheck,
    QualityMetrics,
    SeasonalCheck,
    ValidationOutcome,
    check_data_quality,
    validate_prediction_inputs,
    validate_regression_parameters,
    validate_seasonal_data,
)

__all__ = [
    "FilterResult",
    "HistoricalRecord",
    "QualityCheck",
    "QualityMetrics",
    "SeasonalCheck",
    "ValidationOutcome",
    "check_data_quality",
    "filter_invalid_historical_data",
    "is_null_or_nan",
    "is_valid_number",
    "latest_water_level",
    "validate_date",
    "validate_numeric_parameter",
    "validate_prediction_inputs",
    "validate_regression_parameters",
    "validate_seasonal_data",
]
