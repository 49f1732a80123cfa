"""
Schema-driven request validation.

``validate`` walks every declared field of every declared section and
collects all violations before deciding, so callers always get a complete
error report. On success it returns a ``NormalizedRequest`` with coerced
values, defaults applied and undeclared fields removed.
"""

import math
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from .exceptions import RequestValidationError
from .fields import OBJECT_ID_PATTERN
from .models import (
    FieldError,
    FieldKind,
    FieldSpec,
    MISSING,
    NormalizedRequest,
    ObjectSchema,
    RequestSchema,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

SECTIONS = ("body", "query", "params")


class _FieldViolation(Exception):
    """Stops checking one field after a type failure."""


def validate(schema: RequestSchema, raw: Mapping[str, Any]) -> NormalizedRequest:
    """
    Validate a raw request against a schema.

    Args:
        schema: Declarative request schema
        raw: Mapping with optional "body", "query" and "params" entries

    Returns:
        NormalizedRequest with cleaned sections

    Raises:
        RequestValidationError: With every field error found
    """
    errors: list[FieldError] = []
    normalized = NormalizedRequest()

    for section in SECTIONS:
        section_schema: Optional[ObjectSchema] = getattr(schema, section)
        data = raw.get(section)

        if section_schema is None:
            setattr(normalized, section, dict(data) if isinstance(data, Mapping) else {})
            continue

        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            errors.append(FieldError(section, "Expected an object"))
            continue

        setattr(normalized, section, _validate_object(section, section_schema, data, errors))

    if errors:
        raise RequestValidationError(errors)
    return normalized


def _validate_object(
    section: str,
    schema: ObjectSchema,
    data: Mapping[str, Any],
    errors: list[FieldError],
) -> dict[str, Any]:
    result: dict[str, Any] = dict(data) if schema.allow_unknown else {}

    for spec in schema.fields:
        path = f"{section}.{spec.name}"
        value = data.get(spec.name)

        if value is None or _is_blank(spec, value):
            if spec.required:
                errors.append(FieldError(path, f"{spec.display_name} is required"))
            elif spec.default is not MISSING:
                result[spec.name] = spec.default
            else:
                result.pop(spec.name, None)
            continue

        messages: list[str] = []
        try:
            result[spec.name] = _check_field(spec, value, messages)
        except _FieldViolation:
            pass
        errors.extend(FieldError(path, message) for message in messages)

    return result


def _is_blank(spec: FieldSpec, value: Any) -> bool:
    """Empty input counts as absent, except for a required free-text field."""
    if not isinstance(value, str):
        return False
    if spec.kind is FieldKind.STRING:
        return value == "" and not spec.required
    return value.strip() == ""


def _check_field(spec: FieldSpec, value: Any, messages: list[str]) -> Any:
    checker = _CHECKERS[spec.kind]
    return checker(spec, value, messages)


def _fail(spec: FieldSpec, messages: list[str], default: str) -> None:
    messages.append(spec.message or default)
    raise _FieldViolation()


def _check_string(spec: FieldSpec, value: Any, messages: list[str]) -> str:
    if not isinstance(value, str):
        _fail(spec, messages, f"{spec.display_name} must be a string")
    if spec.trim:
        value = value.strip()

    if spec.min_length is not None and len(value) < spec.min_length:
        if spec.min_length == 1:
            messages.append(f"{spec.display_name} is required")
        else:
            messages.append(
                f"{spec.display_name} must be at least {spec.min_length} characters"
            )
    if spec.max_length is not None and len(value) > spec.max_length:
        messages.append(f"{spec.display_name} must be at most {spec.max_length} characters")
    if spec.pattern is not None and value and not re.fullmatch(spec.pattern, value):
        messages.append(spec.message or f"{spec.display_name} has an invalid format")
    if spec.choices is not None and value not in spec.choices:
        messages.append(
            spec.message
            or f"{spec.display_name} must be one of: {', '.join(map(str, spec.choices))}"
        )
    return value


def _check_email(spec: FieldSpec, value: Any, messages: list[str]) -> str:
    if not isinstance(value, str):
        _fail(spec, messages, "Invalid email")
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        _fail(spec, messages, "Invalid email")
    if spec.max_length is not None and len(value) > spec.max_length:
        messages.append(f"{spec.display_name} must be at most {spec.max_length} characters")
    return value


def _to_number(spec: FieldSpec, value: Any, messages: list[str]) -> float | int:
    if isinstance(value, bool):
        _fail(spec, messages, f"{spec.display_name} must be a number")
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not NUMBER_PATTERN.fullmatch(text):
            _fail(spec, messages, f"{spec.display_name} must be a number")
        number = float(text)
        if number.is_integer() and "." not in value and "e" not in value.lower():
            number = int(number)
    else:
        _fail(spec, messages, f"{spec.display_name} must be a number")

    if isinstance(number, float) and not math.isfinite(number):
        _fail(spec, messages, f"{spec.display_name} must be a finite number")
    return number


def _decimal_places(number: float | int) -> int:
    try:
        exponent = Decimal(str(number)).normalize().as_tuple().exponent
    except InvalidOperation:
        return 0
    return max(0, -exponent) if isinstance(exponent, int) else 0


def _check_bounds(spec: FieldSpec, number: float | int, messages: list[str]) -> None:
    if spec.positive and number <= 0:
        messages.append(f"{spec.display_name} must be greater than 0")
    if spec.minimum is not None and number < spec.minimum:
        messages.append(f"{spec.display_name} must be at least {spec.minimum:g}")
    if spec.maximum is not None and number > spec.maximum:
        messages.append(f"{spec.display_name} is too large")


def _check_number(spec: FieldSpec, value: Any, messages: list[str]) -> float | int:
    number = _to_number(spec, value, messages)
    _check_bounds(spec, number, messages)
    if spec.max_decimals is not None and _decimal_places(number) > spec.max_decimals:
        messages.append(
            f"{spec.display_name} cannot have more than {spec.max_decimals} decimal places"
        )
    return number


def _check_integer(spec: FieldSpec, value: Any, messages: list[str]) -> int:
    number = _to_number(spec, value, messages)
    if isinstance(number, float):
        if not number.is_integer():
            _fail(spec, messages, f"{spec.display_name} must be an integer")
        number = int(number)
    _check_bounds(spec, number, messages)
    return number


def _check_boolean(spec: FieldSpec, value: Any, messages: list[str]) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    _fail(spec, messages, f"{spec.display_name} must be a boolean")


def _check_object_id(spec: FieldSpec, value: Any, messages: list[str]) -> str:
    if not isinstance(value, str) or not re.fullmatch(spec.pattern or OBJECT_ID_PATTERN, value):
        _fail(spec, messages, f"Invalid {spec.display_name}")
    return value.lower()


def _check_datetime(spec: FieldSpec, value: Any, messages: list[str]) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            _fail(spec, messages, "Invalid date format")
    else:
        _fail(spec, messages, "Invalid date format")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


_CHECKERS = {
    FieldKind.STRING: _check_string,
    FieldKind.EMAIL: _check_email,
    FieldKind.NUMBER: _check_number,
    FieldKind.INTEGER: _check_integer,
    FieldKind.BOOLEAN: _check_boolean,
    FieldKind.OBJECT_ID: _check_object_id,
    FieldKind.DATETIME: _check_datetime,
}
