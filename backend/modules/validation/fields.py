"""
Field constructors for building schemas.

Each helper returns a ``FieldSpec`` preconfigured for a common shape, so
route schemas read as a list of declarations:

    register_schema = RequestSchema(
        body=obj(
            email(),
            string("password", min_length=6, max_length=100),
            string("name", max_length=100),
        )
    )
"""

from dataclasses import replace
from typing import Any

from .models import FieldKind, FieldSpec, ObjectSchema, MISSING

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
YEAR_PATTERN = r"^\d{4}$"

MAX_AMOUNT = 1_000_000_000


def obj(*fields: FieldSpec, allow_unknown: bool = False) -> ObjectSchema:
    return ObjectSchema(fields=tuple(fields), allow_unknown=allow_unknown)


def string(
    name: str,
    *,
    required: bool = True,
    min_length: int | None = 1,
    max_length: int | None = None,
    **kwargs: Any,
) -> FieldSpec:
    return FieldSpec(
        name=name,
        kind=FieldKind.STRING,
        required=required,
        min_length=min_length,
        max_length=max_length,
        **kwargs,
    )


def email(name: str = "email", *, required: bool = True, **kwargs: Any) -> FieldSpec:
    kwargs.setdefault("message", "Invalid email")
    return FieldSpec(name=name, kind=FieldKind.EMAIL, required=required, **kwargs)


def choice(name: str, choices: tuple[Any, ...], *, required: bool = True, **kwargs: Any) -> FieldSpec:
    kwargs.setdefault(
        "message", f"{kwargs.get('label') or name} must be one of: {', '.join(map(str, choices))}"
    )
    return FieldSpec(
        name=name, kind=FieldKind.STRING, required=required, choices=choices, **kwargs
    )


def number(name: str, *, required: bool = True, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.NUMBER, required=required, **kwargs)


def amount(name: str = "amount", *, required: bool = True, **kwargs: Any) -> FieldSpec:
    """Money value: positive, at most 2 decimal places, capped at MAX_AMOUNT."""
    kwargs.setdefault("positive", True)
    kwargs.setdefault("maximum", MAX_AMOUNT)
    return FieldSpec(
        name=name, kind=FieldKind.NUMBER, required=required, max_decimals=2, **kwargs
    )


def integer(name: str, *, required: bool = True, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.INTEGER, required=required, **kwargs)


def boolean(name: str, *, required: bool = True, **kwargs: Any) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.BOOLEAN, required=required, **kwargs)


def object_id(name: str = "id", *, required: bool = True, **kwargs: Any) -> FieldSpec:
    kwargs.setdefault("message", f"Invalid {kwargs.get('label') or name}")
    return FieldSpec(
        name=name,
        kind=FieldKind.OBJECT_ID,
        required=required,
        pattern=OBJECT_ID_PATTERN,
        **kwargs,
    )


def datetime_field(name: str, *, required: bool = True, **kwargs: Any) -> FieldSpec:
    kwargs.setdefault("message", "Invalid date format")
    return FieldSpec(name=name, kind=FieldKind.DATETIME, required=required, **kwargs)


def hex_color(name: str = "color", *, required: bool = False, **kwargs: Any) -> FieldSpec:
    kwargs.setdefault("message", "Color must be a valid hex (#RRGGBB)")
    return string(name, required=required, pattern=HEX_COLOR_PATTERN, **kwargs)


def month(name: str = "month", *, required: bool = False) -> FieldSpec:
    return string(
        name, required=required, pattern=MONTH_PATTERN, message="Invalid month format (YYYY-MM)"
    )


def year(name: str = "year", *, required: bool = False) -> FieldSpec:
    return string(name, required=required, pattern=YEAR_PATTERN, message="Invalid year format")


def optional(spec: FieldSpec, default: Any = MISSING) -> FieldSpec:
    """Copy of ``spec`` that may be absent, optionally with a default."""
    return replace(spec, required=False, default=default)
