"""
Validation module exceptions.
"""

from shared.exceptions import ValidationError

from .models import FieldError


class RequestValidationError(ValidationError):
    """Raised when a request fails its schema. Carries every field error."""

    def __init__(self, field_errors: list[FieldError], message: str = "Validation errors"):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"fields": [error.path for error in field_errors]},
        )
        self.field_errors = field_errors
