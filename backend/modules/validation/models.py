"""
Validation module data models.

Schemas are plain, immutable declarative data: a ``RequestSchema`` holds up
to three ``ObjectSchema`` sections (body, query, params), each a tuple of
``FieldSpec`` entries. Nothing here executes validation; see validator.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FieldKind(str, Enum):
    """Type constraint applied to a field value."""

    STRING = "string"
    EMAIL = "email"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT_ID = "object_id"
    DATETIME = "datetime"


class _Missing:
    """Sentinel for 'no default value'."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FieldSpec:
    """
    Declarative description of one field.

    Attributes:
        name: Key in the incoming section (also the key in normalized output)
        kind: Type constraint
        required: Whether absence is an error
        default: Value used when an optional field is absent
        label: Human-readable name used in messages (defaults to name)
        min_length / max_length: String length bounds (after trimming)
        minimum / maximum: Inclusive numeric bounds
        positive: Numeric value must be strictly greater than zero
        max_decimals: Maximum number of decimal places for numbers
        pattern: Regex the whole (trimmed) string must match
        choices: Allowed values
        trim: Strip surrounding whitespace from strings
        message: Overrides the message for type/pattern/choice failures
    """

    name: str
    kind: FieldKind = FieldKind.STRING
    required: bool = True
    default: Any = MISSING
    label: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    positive: bool = False
    max_decimals: Optional[int] = None
    pattern: Optional[str] = None
    choices: Optional[tuple[Any, ...]] = None
    trim: bool = True
    message: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.label:
            return self.label
        return self.name[:1].upper() + self.name[1:]


@dataclass(frozen=True)
class ObjectSchema:
    """Fields expected in one request section."""

    fields: tuple[FieldSpec, ...] = ()
    allow_unknown: bool = False


@dataclass(frozen=True)
class RequestSchema:
    """
    Expected shape of a request.

    A section left as None is not validated and passes through untouched.
    """

    body: Optional[ObjectSchema] = None
    query: Optional[ObjectSchema] = None
    params: Optional[ObjectSchema] = None


@dataclass(frozen=True)
class FieldError:
    """One field-level violation. ``path`` is dotted, e.g. ``body.email``."""

    path: str
    message: str


@dataclass
class NormalizedRequest:
    """Request data after coercion, defaults and unknown-field stripping."""

    body: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    params: dict[str, Any] = field(default_factory=dict)
