"""Unit tests for error classification utilities."""

import pytest

from src.core.errors import (
    ErrorCategory,
    ErrorCode,
    ErrorSeverity,
    RecordNotFoundError,
    classify_agent_error,
    classify_error_with_response,
)


@pytest.mark.unit
class TestClassifyAgentError:
    """Tests for classify_agent_error function."""

    def test_openrouter_quota_exceeded(self):
        """Test classification of OpenRouter quota exceeded error."""
        exception = Exception("OpenRouter API error: quota exceeded for this model")
        category, message = classify_agent_error(exception)

        assert category == ErrorCategory.SERVICE_QUOTA_EXCEEDED
        assert "quota" in message.lower()
        assert "try again later" in message.lower()

    def test_insufficient_credits(self):
        exception = Exception("API error: insufficient credits remaining")
        category, _ = classify_agent_error(exception)

        assert category == ErrorCategory.SERVICE_QUOTA_EXCEEDED

    @pytest.mark.parametrize(
        "text",
        [
            "Rate limit exceeded. Please try again in 60 seconds.",
            "HTTP 429: Too many requests",
            "Request throttled due to rate limits",
            "RATE LIMIT EXCEEDED",
        ],
    )
    def test_rate_limit(self, text):
        category, _ = classify_agent_error(Exception(text))

        assert category == ErrorCategory.RATE_LIMIT_EXCEEDED

    @pytest.mark.parametrize("text", ["Invalid API key provided", "HTTP 401: Unauthorized access"])
    def test_authentication_failed(self, text):
        category, message = classify_agent_error(Exception(text))

        assert category == ErrorCategory.AUTHENTICATION_FAILED
        assert "api key" in message.lower()

    def test_missing_credential_is_authentication_failure(self):
        """A report requested without an OpenRouter key is reported as an auth problem."""
        exception = ValueError("OpenRouter API key credential not configured. Set OPENROUTER_API_KEY.")
        category, _ = classify_agent_error(exception)

        assert category == ErrorCategory.AUTHENTICATION_FAILED

    def test_authentication_error_type(self):
        class AuthenticationError(Exception):
            pass

        category, _ = classify_agent_error(AuthenticationError("Auth failed"))

        assert category == ErrorCategory.AUTHENTICATION_FAILED

    @pytest.mark.parametrize(
        "exception",
        [
            Exception("Connection error: Unable to reach server"),
            Exception("Request timeout after 30 seconds"),
            Exception("HTTP 503: Service unavailable"),
            ConnectionError("refused"),
            TimeoutError("slow"),
        ],
    )
    def test_network_errors(self, exception):
        category, _ = classify_agent_error(exception)

        assert category == ErrorCategory.NETWORK_ERROR

    def test_unknown_error(self):
        category, message = classify_agent_error(Exception("Something unexpected happened"))

        assert category == ErrorCategory.UNKNOWN
        assert "unexpected error" in message.lower()

    def test_multiple_error_indicators(self):
        """Quota takes precedence over rate limit."""
        category, _ = classify_agent_error(Exception("Quota exceeded due to rate limit"))

        assert category == ErrorCategory.SERVICE_QUOTA_EXCEEDED


@pytest.mark.unit
class TestClassifyErrorWithResponse:
    """Tests for classify_error_with_response function."""

    def test_missing_record(self):
        response = classify_error_with_response(RecordNotFoundError("Record not found in tasks: 12"))

        assert response.code == ErrorCode.ERR_RECORD_NOT_FOUND
        assert response.severity == ErrorSeverity.LOW

    def test_invalid_credentials(self):
        response = classify_error_with_response(PermissionError("Invalid username or password"))

        assert response.code == ErrorCode.ERR_INVALID_CREDENTIALS

    def test_permission_denied(self):
        response = classify_error_with_response(PermissionError("Permission denied: role LIMPEZA cannot manage tasks"))

        assert response.code == ErrorCode.ERR_PERMISSION_DENIED
        assert response.severity == ErrorSeverity.MEDIUM

    def test_missing_photo(self):
        response = classify_error_with_response(ValueError("Cannot complete task 3 without at least one photo"))

        assert response.code == ErrorCode.ERR_EVIDENCE_REQUIRED

    def test_invalid_state_transition(self):
        response = classify_error_with_response(ValueError("Cannot start: task 3 is in COMPLETED state"))

        assert response.code == ErrorCode.ERR_INVALID_STATE_TRANSITION

    def test_validation_keeps_message(self):
        response = classify_error_with_response(ValueError("Name must have at least 3 characters"))

        assert response.code == ErrorCode.ERR_VALIDATION
        assert response.message == "Name must have at least 3 characters"

    def test_agent_errors_fall_through(self):
        response = classify_error_with_response(Exception("Rate limit exceeded"))

        assert response.code == ErrorCode.ERR_RATE_LIMIT_EXCEEDED

    def test_unknown(self):
        response = classify_error_with_response(RuntimeError("boom"))

        assert response.code == ErrorCode.ERR_UNKNOWN
