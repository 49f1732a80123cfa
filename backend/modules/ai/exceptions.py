"""
AI assistant module exceptions.
"""

from shared.exceptions import ExternalServiceError, FinanceTrackerError, ValidationError


class AIConfigurationError(FinanceTrackerError):
    """Raised when the assistant can't be used because it isn't configured."""

    status_code = 500

    def __init__(self, reason: str):
        super().__init__(
            "AI service configuration error",
            code="AI_CONFIGURATION_ERROR",
            details={"reason": reason},
        )


class AIRateLimitedError(FinanceTrackerError):
    """Raised when the upstream model provider throttles us."""

    status_code = 429

    def __init__(self):
        super().__init__(
            "Too many requests. Please try again later",
            code="AI_UPSTREAM_RATE_LIMITED",
        )


class AIServiceError(ExternalServiceError):
    """Raised when the upstream model call fails for any other reason."""

    def __init__(self, reason: str):
        super().__init__(
            "Failed to get response from AI assistant",
            service="anthropic",
            code="AI_SERVICE_ERROR",
            details={"reason": reason},
        )


class UnsupportedDocumentError(ValidationError):
    """Raised when an uploaded file is not a statement format we can read."""

    def __init__(self, filename: str):
        super().__init__(
            "Unsupported file type. Use PDF, Excel (.xlsx), CSV or an image (JPG, PNG, WEBP, GIF)",
            code="UNSUPPORTED_DOCUMENT",
            details={"filename": filename},
        )


class DocumentTooLargeError(ValidationError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File is too large. Maximum size: {limit // (1024 * 1024)} MB",
            code="DOCUMENT_TOO_LARGE",
            details={"size": size, "limit": limit},
        )


class DocumentParseError(ValidationError):
    """Raised when a document can't be read or holds no transactions."""

    def __init__(self, message: str, file_type: str):
        super().__init__(
            message,
            code="DOCUMENT_PARSE_ERROR",
            details={"file_type": file_type},
        )
