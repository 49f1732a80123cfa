"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Optional

from shared.models import ApiModel


class FieldErrorItem(BaseModel):
    """One failed field, addressed by dotted path (``body.email``)."""

    field: str
    message: str


class ErrorResponse(ApiModel):
    """Standard error response format."""

    success: bool = False
    message: str
    errors: Optional[list[FieldErrorItem]] = None
    retry_after: Optional[int] = None
    stack: Optional[str] = None
