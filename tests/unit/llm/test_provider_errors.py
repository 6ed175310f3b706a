"""Test provider fault classification."""
from aqi_advisor.errors import (
    ModelUnavailableError,
    ProviderFaultError,
    classify_provider_error,
    is_model_unavailable_message,
)


class TestClassifyProviderError:
    def test_status_404_is_unavailable(self):
        error = classify_provider_error(Exception("boom"), "gemini-x", status_code=404)
        assert isinstance(error, ModelUnavailableError)
        assert error.model == "gemini-x"
        assert error.status_code == 404

    def test_structured_status_beats_message(self):
        # A 401 that happens to mention "not found" is still an auth fault
        error = classify_provider_error(Exception("API key not found"), "m", status_code=401)
        assert isinstance(error, ProviderFaultError)

    def test_message_heuristic_without_status(self):
        error = classify_provider_error(Exception("models/gemini-9 is not found for API version v1beta"), "gemini-9")
        assert isinstance(error, ModelUnavailableError)
        assert error.status_code is None

    def test_not_available_message(self):
        error = classify_provider_error(Exception("Model gemini-1.0 not available"), "gemini-1.0")
        assert isinstance(error, ModelUnavailableError)

    def test_other_messages_are_faults(self):
        error = classify_provider_error(Exception("Quota exceeded for project"), "m")
        assert isinstance(error, ProviderFaultError)
        assert "Quota" in str(error)

    def test_empty_message_uses_class_name(self):
        error = classify_provider_error(TimeoutError(), "m")
        assert isinstance(error, ProviderFaultError)
        assert str(error) == "TimeoutError"


class TestUnavailableMarkers:
    def test_markers(self):
        assert is_model_unavailable_message("404 NOT_FOUND")
        assert is_model_unavailable_message("The model `x` does not exist")
        assert not is_model_unavailable_message("rate limit exceeded")
