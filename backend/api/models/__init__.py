"""API models package."""

from .errors import ErrorResponse, FieldErrorItem

__all__ = [
    "ErrorResponse",
    "FieldErrorItem",
]
