"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    FinanceTrackerError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class TestFinanceTrackerError:
    def test_message(self):
        """FinanceTrackerError should store message."""
        error = FinanceTrackerError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """FinanceTrackerError should default code to class name."""
        error = FinanceTrackerError("Test error")
        assert error.code == "FinanceTrackerError"

    def test_custom_code(self):
        """FinanceTrackerError should accept custom code."""
        error = FinanceTrackerError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_default_details(self):
        """FinanceTrackerError should default details to empty dict."""
        error = FinanceTrackerError("Test error")
        assert error.details == {}

    def test_to_dict(self):
        """FinanceTrackerError should convert to dict."""
        error = FinanceTrackerError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_default_status_code(self):
        """Unclassified errors should map to 500."""
        assert FinanceTrackerError("boom").status_code == 500


class TestStatusCodes:
    @pytest.mark.parametrize(
        "error_class, status_code",
        [
            (NotFoundError, 404),
            (ValidationError, 400),
            (ConflictError, 400),
            (AuthenticationError, 401),
            (AuthorizationError, 403),
        ],
    )
    def test_status_codes(self, error_class, status_code):
        """Each base error should carry its HTTP status."""
        error = error_class("message")
        assert error.status_code == status_code
        assert isinstance(error, FinanceTrackerError)


class TestExternalServiceError:
    def test_stores_service(self):
        """ExternalServiceError should record the failing service."""
        error = ExternalServiceError("Upstream down", service="anthropic")
        assert error.service == "anthropic"
        assert error.details["service"] == "anthropic"
        assert error.status_code == 502

    def test_keeps_existing_details(self):
        """ExternalServiceError should merge service into given details."""
        error = ExternalServiceError("Upstream down", service="anthropic", details={"reason": "x"})
        assert error.details == {"reason": "x", "service": "anthropic"}
