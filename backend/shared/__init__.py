"""
Shared infrastructure for the Finance Tracker backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: In-memory document store
- exceptions: Base exception classes
- logging: One-time logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import DocumentCollection, DocumentStore, new_object_id, utcnow
from .exceptions import (
    FinanceTrackerError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import ApiModel, AuthenticatedUser, EntryType

__all__ = [
    "Settings",
    "get_settings",
    "DocumentCollection",
    "DocumentStore",
    "new_object_id",
    "utcnow",
    "FinanceTrackerError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "ApiModel",
    "AuthenticatedUser",
    "EntryType",
]
