"""
Authentication module exceptions.

These exceptions are raised by the auth module and rendered by the API
error handlers. Token failures deliberately share one public message; the
underlying reason is kept in ``details`` for logs only.
"""

from shared.exceptions import AuthenticationError, ConflictError, ValidationError


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Not authorized, no token provided"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed, forged or otherwise unusable."""

    def __init__(self, reason: str = "invalid token", code: str = "INVALID_TOKEN"):
        super().__init__(
            "Not authorized, token failed",
            code=code,
            details={"reason": reason},
        )


class ExpiredTokenError(InvalidTokenError):
    """Raised when a token is past its expiry."""

    def __init__(self, reason: str = "token has expired"):
        super().__init__(reason, code="TOKEN_EXPIRED")


class UserNotFoundError(AuthenticationError):
    """Raised when a verified token names a user that no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password do not match a user."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class IncorrectPasswordError(AuthenticationError):
    """Raised when the current password given for a change is wrong."""

    def __init__(self):
        super().__init__("Current password is incorrect", code="INCORRECT_PASSWORD")


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            "User already exists with this email",
            code="USER_ALREADY_EXISTS",
            details={"email": email},
        )


class EmailInUseError(ConflictError):
    """Raised when changing profile email to one owned by another user."""

    def __init__(self, email: str):
        super().__init__(
            "Email already in use",
            code="EMAIL_IN_USE",
            details={"email": email},
        )


class InvalidResetTokenError(ValidationError):
    """Raised when a password reset token is unknown or expired."""

    def __init__(self):
        super().__init__("Invalid or expired reset token", code="INVALID_RESET_TOKEN")
