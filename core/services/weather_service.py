# =============================================================================
# core/services/weather_service.py - Weather Lookup Business Logic
# =============================================================================
# Current-weather lookups (by city name or by coordinates) and the 5-day
# forecast. Lookups are written to search history; forecasts are not.
# =============================================================================

import logging

from app.config import Settings
from app.exceptions import ValidationError
from core.models.weather import ForecastDay, Units, WeatherRecord, select_daily_slots
from core.services.history_service import HistoryService
from lib.openweather_client import OpenWeatherClient
from lib.utils import parse_coordinate

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Service for weather lookups.

    Each operation makes exactly one upstream call and at most one storage
    write, so there is nothing to roll back when a step fails.
    """

    def __init__(
        self,
        weather_client: OpenWeatherClient,
        history: HistoryService,
        settings: Settings,
    ):
        self.weather_client = weather_client
        self.history = history
        self.settings = settings

    async def lookup_by_city(self, city: str, units: Units = Units.METRIC) -> WeatherRecord:
        """
        Fetch current weather for a city name and record it in history.

        Raises:
            OpenWeatherError: If the upstream call fails
            IncompleteWeatherDataError: If the payload lacks required fields
        """
        payload = await self.weather_client.current_by_city(city, units=units.value)
        record = WeatherRecord.from_upstream(payload)
        return await self.history.record(record)

    async def lookup_by_coordinates(
        self,
        lat: str | None,
        lon: str | None,
        units: Units = Units.METRIC,
    ) -> WeatherRecord:
        """
        Fetch current weather for a latitude/longitude pair and record it.

        Raises:
            ValidationError: If either coordinate is missing or not a number
        """
        if lat is None or lon is None or not str(lat).strip() or not str(lon).strip():
            raise ValidationError("Coordinates required", details={"lat": lat, "lon": lon})

        latitude = parse_coordinate(lat)
        longitude = parse_coordinate(lon)
        if latitude is None or longitude is None:
            raise ValidationError(
                "Latitude and longitude must be numbers",
                details={"lat": lat, "lon": lon},
            )

        payload = await self.weather_client.current_by_coordinates(
            latitude, longitude, units=units.value
        )
        record = WeatherRecord.from_upstream(payload)
        return await self.history.record(record)

    async def forecast(
        self,
        city: str,
        units: Units = Units.METRIC,
    ) -> tuple[str, list[ForecastDay]]:
        """
        Fetch the 5-day forecast and keep one slot per day.

        Returns:
            (upstream city name, selected forecast days)
        """
        payload = await self.weather_client.forecast_by_city(city, units=units.value)
        slots = payload.get("list") or []
        city_name = (payload.get("city") or {}).get("name") or city

        days = [
            ForecastDay.from_slot(
                slot,
                icon_base_url=self.settings.OPENWEATHER_ICON_URL,
                tz=self.settings.DISPLAY_TIMEZONE,
            )
            for slot in select_daily_slots(slots)
        ]
        logger.debug(f"Forecast for {city_name}: {len(days)} of {len(slots)} slots kept")
        return city_name, days
