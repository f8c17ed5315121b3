# =============================================================================
# lib/openweather_client.py - OpenWeatherMap Client
# =============================================================================
# Async wrapper around the OpenWeatherMap REST API:
# - current weather by city name
# - current weather by coordinates
# - 5-day / 3-hour forecast by city name
#
# One client (and its connection pool) is created at startup and shared by
# all requests. No retries: an upstream failure is raised to the caller as
# an OpenWeatherError carrying whatever status the upstream sent.
#
# Usage:
#   client = OpenWeatherClient(api_key="...")
#   payload = await client.current_by_city("Mumbai", units="metric")
#   await client.close()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT = 10.0


class OpenWeatherError(Exception):
    """
    Error talking to OpenWeatherMap.

    status_code is None when no response was received (connection error,
    timeout, unparseable body).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"


def _error_message(response: httpx.Response) -> str:
    """Pull the upstream "message" field out of an error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


class OpenWeatherClient:
    """Async OpenWeatherMap client backed by a single httpx.AsyncClient."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        lang: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._lang = lang
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        query = {**params, "appid": self._api_key}
        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.TimeoutException as exc:
            raise OpenWeatherError(f"Upstream request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise OpenWeatherError(f"Upstream request failed: {exc}") from exc

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"OpenWeather {endpoint} returned {response.status_code}: {message}")
            raise OpenWeatherError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise OpenWeatherError(f"Invalid JSON from upstream: {exc}") from exc
        if not isinstance(payload, dict):
            raise OpenWeatherError("Unexpected upstream response shape")
        return payload

    # -------------------------------------------------------------------------
    # Current Weather
    # -------------------------------------------------------------------------

    async def current_by_city(self, city: str, units: str = "metric") -> dict[str, Any]:
        """Fetch current conditions for a city name (e.g. "Mumbai" or "Paris,FR")."""
        params: dict[str, Any] = {"q": city, "units": units}
        if self._lang:
            params["lang"] = self._lang
        logger.debug(f"Fetching current weather for city={city!r} units={units}")
        return await self._get("/weather", params)

    async def current_by_coordinates(
        self,
        lat: float,
        lon: float,
        units: str = "metric",
    ) -> dict[str, Any]:
        """Fetch current conditions for a latitude/longitude pair."""
        logger.debug(f"Fetching current weather for lat={lat} lon={lon} units={units}")
        return await self._get("/weather", {"lat": lat, "lon": lon, "units": units})

    # -------------------------------------------------------------------------
    # Forecast
    # -------------------------------------------------------------------------

    async def forecast_by_city(self, city: str, units: str = "metric") -> dict[str, Any]:
        """Fetch the 5-day / 3-hour forecast (40 slots in "list")."""
        logger.debug(f"Fetching forecast for city={city!r} units={units}")
        return await self._get("/forecast", {"q": city, "units": units})

    async def close(self) -> None:
        await self._client.aclose()
