"""
Base exception classes for the Finance Tracker backend.

Each module should define its own exceptions that inherit from these bases.
Every base carries the HTTP status it maps to, so the API error handlers can
render any of them without knowing the concrete subclass.
"""

from typing import Optional, Any


class FinanceTrackerError(Exception):
    """
    Base exception for all Finance Tracker errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        # Extra response headers, e.g. rate-limit counters of the request
        self.headers: dict[str, str] = {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging and debugging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(FinanceTrackerError):
    """Resource not found."""

    status_code = 404


class ValidationError(FinanceTrackerError):
    """Input validation failed."""

    status_code = 400


class ConflictError(FinanceTrackerError):
    """Request conflicts with existing state (e.g., duplicate email)."""

    status_code = 400


class AuthenticationError(FinanceTrackerError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(FinanceTrackerError):
    """Authorization failed (resource belongs to someone else)."""

    status_code = 403


class ExternalServiceError(FinanceTrackerError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
