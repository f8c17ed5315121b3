# =============================================================================
# tests/test_exceptions.py - Error Translation Tests
# =============================================================================

import pytest

from app.exceptions import (
    FavoriteNotFoundError,
    InternalError,
    StorageError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamNotFoundError,
    UpstreamRateLimitedError,
    ValidationError,
    translate_error,
)
from lib.openweather_client import OpenWeatherError
from lib.supabase_client import SupabaseClientError


class TestTranslateError:

    @pytest.mark.parametrize(
        "status, expected",
        [(401, UpstreamAuthError), (404, UpstreamNotFoundError), (429, UpstreamRateLimitedError)],
    )
    def test_known_upstream_statuses(self, status, expected):
        translated = translate_error(OpenWeatherError("whatever", status_code=status))

        assert isinstance(translated, expected)
        assert translated.status_code == status

    def test_other_upstream_status_keeps_message(self):
        translated = translate_error(OpenWeatherError("Internal error", status_code=500))

        assert type(translated) is UpstreamError
        assert translated.status_code == 500
        assert translated.message == "Internal error"

    def test_no_upstream_response(self):
        translated = translate_error(OpenWeatherError("Upstream request failed: DNS"))

        assert isinstance(translated, InternalError)
        assert translated.status_code == 500
        assert translated.message == "Upstream request failed: DNS"

    def test_storage_error(self):
        translated = translate_error(SupabaseClientError("Failed to query favorites: boom", code="FETCH_FAILED"))

        assert isinstance(translated, StorageError)
        assert translated.message == "Failed to query favorites: boom"

    def test_api_exceptions_pass_through(self):
        error = FavoriteNotFoundError("abc")
        assert translate_error(error) is error

    def test_unexpected_exception(self):
        translated = translate_error(KeyError("main"))

        assert translated.status_code == 500
        assert translated.code == "INTERNAL_ERROR"

    def test_exception_without_message_uses_class_name(self):
        assert translate_error(RuntimeError()).message == "RuntimeError"


class TestEnvelope:

    def test_minimal_envelope(self):
        assert ValidationError("Coordinates required").to_dict() == {
            "success": False,
            "error": "Coordinates required",
            "code": "VALIDATION_ERROR",
        }

    def test_envelope_with_suggestion_and_details(self):
        body = FavoriteNotFoundError("abc").to_dict()

        assert body["success"] is False
        assert body["error"] == "Favorite not found: abc"
        assert body["suggestion"]
        assert body["details"] == {"id": "abc"}
