"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Resolved by the auth gate from a verified identity token plus a user
    store lookup, and made available to route handlers through the request
    context. Lives for a single request and is never persisted.
    """

    id: str = Field(..., description="User ID (24-char hex)")
    email: str = Field(..., description="User's email address")
    name: str = Field(..., description="Display name")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }


class EntryType(str, Enum):
    """Direction of money flow, shared by transactions and categories."""

    INCOME = "income"
    EXPENSE = "expense"


class ApiModel(BaseModel):
    """
    Base for models that cross the HTTP boundary.

    Fields are snake_case in Python and camelCase on the wire
    (``target_amount`` <-> ``targetAmount``). Either spelling is accepted
    on input so stored documents validate directly.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(ApiModel):
    """Minimal success envelope."""

    success: bool = True
    message: str
