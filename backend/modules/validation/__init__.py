"""
Request validation module.

Declarative schemas for request body, query and params, checked in one
pass that reports every violation.

Public API:
- validate: Check a raw request against a RequestSchema
- RequestSchema, ObjectSchema, FieldSpec: Schema data
- fields: Constructors for common field shapes
- RequestValidationError: Raised with the full list of FieldError
"""

from . import fields
from .exceptions import RequestValidationError
from .models import (
    FieldError,
    FieldKind,
    FieldSpec,
    NormalizedRequest,
    ObjectSchema,
    RequestSchema,
)
from .validator import validate

__all__ = [
    "validate",
    "fields",
    "RequestSchema",
    "ObjectSchema",
    "FieldSpec",
    "FieldKind",
    "FieldError",
    "NormalizedRequest",
    "RequestValidationError",
]
