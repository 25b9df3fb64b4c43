# engine/exceptions.py


class PredictionError(Exception):
    kind = "prediction_error"


class TypeMismatch(PredictionError, TypeError):
    kind = "type_mismatch"


class RangeViolation(PredictionError, ValueError):
    kind = "range_violation"


class NotFinite(PredictionError, ValueError):
    kind = "not_finite"


class InsufficientData(PredictionError, ValueError):
    kind = "insufficient_data"

    def __init__(self, message: str, found: int, required: int) -> None:
        super().__init__(message)
        self.found = found
        self.required = required


class InvalidCategory(PredictionError, ValueError):
    kind = "invalid_category"


class InvalidDate(PredictionError, ValueError):
    kind = "invalid_date"
