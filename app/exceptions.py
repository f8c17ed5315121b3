# =============================================================================
# app/exceptions.py - Custom Exceptions & Error Translation
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure reaches the client in the same envelope:
#   {"success": false, "error": "<message>", "code": "<CODE>"}
#
# Library errors (OpenWeatherError, SupabaseClientError) are converted into
# this hierarchy by translate_error(). There are no retries anywhere: the
# request that hit the error fails and the process keeps serving.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.openweather_client import OpenWeatherError
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


class WeatherAPIException(Exception):
    """
    Base exception for the weather API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "WEATHER_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the failure envelope."""
        result: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Client Errors
# =============================================================================

class ValidationError(WeatherAPIException):
    """Raised for bad or missing input (coordinates, identifiers, body)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


class FavoriteNotFoundError(WeatherAPIException):
    """Raised when a favorite id doesn't exist."""

    def __init__(self, favorite_id: str):
        super().__init__(
            message=f"Favorite not found: {favorite_id}",
            code="FAVORITE_NOT_FOUND",
            status_code=404,
            suggestion="List favorites to get a current id",
            details={"id": favorite_id},
        )


# =============================================================================
# Upstream Errors
# =============================================================================

class UpstreamError(WeatherAPIException):
    """The weather API answered with an error status; passed through as-is."""

    def __init__(self, status_code: int, message: str, code: str = "UPSTREAM_ERROR"):
        super().__init__(message=message, code=code, status_code=status_code)


class UpstreamAuthError(UpstreamError):
    def __init__(self):
        super().__init__(401, "Invalid API key", code="UPSTREAM_UNAUTHORIZED")
        self.suggestion = "Check OPENWEATHER_API_KEY"


class UpstreamNotFoundError(UpstreamError):
    def __init__(self):
        super().__init__(404, "City not found", code="UPSTREAM_NOT_FOUND")


class UpstreamRateLimitedError(UpstreamError):
    def __init__(self):
        super().__init__(429, "Rate limit exceeded", code="UPSTREAM_RATE_LIMITED")
        self.suggestion = "Wait a minute before retrying"


# =============================================================================
# Server Errors
# =============================================================================

class InternalError(WeatherAPIException):
    """Anything without an upstream status: network failures, bugs."""

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        super().__init__(message=message, code=code, status_code=500)


class StorageError(InternalError):
    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class IncompleteWeatherDataError(InternalError):
    """Raised instead of persisting a record that fails is_valid()."""

    def __init__(self, city: str):
        super().__init__(
            f"Incomplete weather data returned for {city or 'location'}",
            code="INCOMPLETE_WEATHER_DATA",
        )


# =============================================================================
# Translation
# =============================================================================

_UPSTREAM_BY_STATUS = {
    401: UpstreamAuthError,
    404: UpstreamNotFoundError,
    429: UpstreamRateLimitedError,
}


def translate_error(exc: Exception) -> WeatherAPIException:
    """
    Map any exception to the API hierarchy.

    - Upstream response with a status: 401/404/429 get fixed messages,
      anything else keeps the upstream status and message.
    - No upstream response, storage failures and unexpected exceptions
      become 500 with the exception's message.
    """
    if isinstance(exc, WeatherAPIException):
        return exc
    if isinstance(exc, OpenWeatherError):
        if exc.status_code is None:
            return InternalError(exc.message)
        error_class = _UPSTREAM_BY_STATUS.get(exc.status_code)
        if error_class:
            return error_class()
        return UpstreamError(exc.status_code, exc.message)
    if isinstance(exc, SupabaseClientError):
        return StorageError(exc.message)
    return InternalError(str(exc) or exc.__class__.__name__)


# =============================================================================
# Exception Handlers
# =============================================================================

def error_response(exc: WeatherAPIException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def weather_exception_handler(
    request: Request,
    exc: WeatherAPIException
) -> JSONResponse:
    """Convert a WeatherAPIException to the failure envelope."""
    logger.warning(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
    return error_response(exc)


async def library_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Translate upstream/storage library errors, then respond."""
    return await weather_exception_handler(request, translate_error(exc))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap routing errors (unknown path, wrong method) in the failure envelope."""
    response = await weather_exception_handler(
        request,
        WeatherAPIException(str(exc.detail), code="HTTP_ERROR", status_code=exc.status_code),
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Reported as 400 in the standard envelope rather than FastAPI's default 422.
    """
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return await weather_exception_handler(
        request,
        ValidationError("; ".join(messages) or "Invalid request"),
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Last resort: log with traceback and answer 500."""
    logger.exception(f"Unexpected error: {exc}")
    return error_response(translate_error(exc))
