# =============================================================================
# app/routers/weather.py - Weather, Favorites & History Endpoints
# =============================================================================
# Endpoints (relative to the /api/weather prefix):
# - GET    /history            newest search history entries
# - DELETE /history            clear search history
# - GET    /favorites          list favorite cities
# - POST   /favorites          add a favorite city
# - DELETE /favorites/{id}     remove a favorite
# - GET    /current            weather for ?lat=&lon=
# - GET    /forecast/{city}    5-day forecast (one slot per day)
# - GET    /{city}             current weather for a city name
#
# FastAPI matches routes in registration order, so every fixed path is
# declared before the catch-all /{city} route.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from app.config import Settings
from app.dependencies import (
    FavoritesServiceDep,
    HistoryServiceDep,
    SettingsDep,
    WeatherServiceDep,
)
from core.models.weather import ForecastDay, Units, WeatherRecord

logger = logging.getLogger(__name__)

router = APIRouter()

UnitsQuery = Annotated[Units, Query(description="Unit system: metric (°C) or imperial (°F)")]


# =============================================================================
# Request / Response Models
# =============================================================================

class FavoriteCreate(BaseModel):
    """Request to save a city as a favorite."""
    city: str = Field(..., min_length=1, max_length=120, examples=["Pune"])


class MessageResponse(BaseModel):
    """Acknowledgement for favorite mutations."""
    success: bool = Field(True, examples=[True])
    message: str = Field(..., examples=["Added to favorites"])
    created: bool | None = Field(None, examples=[True])
    id: str | None = Field(None, examples=["550e8400-e29b-41d4-a716-446655440000"])


class ClearHistoryResponse(BaseModel):
    success: bool = True
    deleted: int = Field(..., examples=[7])


class ForecastResponse(BaseModel):
    """Five forecast days, one per 24 hours."""
    success: bool = True
    city: str = Field(..., examples=["Mumbai"])
    forecast: list[ForecastDay]


# =============================================================================
# History Endpoints
# =============================================================================

@router.get("/history")
async def get_search_history(
    history: HistoryServiceDep,
    settings: SettingsDep,
    units: UnitsQuery = Units.METRIC,
):
    """
    Get the most recent searches, newest first.

    Temperatures carry the unit glyph ("31°C") and times are rendered in
    DISPLAY_TIMEZONE.
    """
    records = await history.list_recent()
    return {
        "success": True,
        "history": [
            record.to_history_display(
                units,
                icon_base_url=settings.OPENWEATHER_ICON_URL,
                tz=settings.DISPLAY_TIMEZONE,
            )
            for record in records
        ],
    }


@router.delete("/history", response_model=ClearHistoryResponse)
async def clear_history(history: HistoryServiceDep):
    """Delete all search history. Cannot be undone."""
    deleted = await history.clear()
    return ClearHistoryResponse(deleted=deleted)


# =============================================================================
# Favorites Endpoints
# =============================================================================

@router.get("/favorites")
async def get_favorites(
    favorites: FavoritesServiceDep,
    settings: SettingsDep,
    units: UnitsQuery = Units.METRIC,
):
    """List every favorite city with the weather saved when it was added."""
    records = await favorites.list_all()
    return {
        "success": True,
        "favorites": [
            record.to_display(units, icon_base_url=settings.OPENWEATHER_ICON_URL)
            for record in records
        ],
    }


@router.post("/favorites", response_model=MessageResponse, response_model_exclude_none=True)
async def add_favorite(request: FavoriteCreate, favorites: FavoritesServiceDep):
    """
    Add a city to favorites.

    Fresh weather is fetched and stored with the favorite. A city that is
    already saved (exact name match) is reported, not duplicated.
    """
    record = await favorites.add(request.city)
    if record is None:
        return MessageResponse(message="Already in favorites", created=False)
    return MessageResponse(message="Added to favorites", created=True, id=record.id)


@router.delete("/favorites/{favorite_id}", response_model=MessageResponse, response_model_exclude_none=True)
async def remove_favorite(
    favorite_id: Annotated[str, Path(description="Favorite id (UUID)")],
    favorites: FavoritesServiceDep,
):
    """Remove a favorite by id."""
    await favorites.remove(favorite_id)
    return MessageResponse(message="Removed favorite")


# =============================================================================
# Weather Endpoints
# =============================================================================

def _lookup_display(record: WeatherRecord, units: Units, settings: Settings) -> dict:
    """Render a lookup as a fresh reading (the history id is not exposed)."""
    return record.model_copy(update={"id": None}).to_display(
        units, icon_base_url=settings.OPENWEATHER_ICON_URL
    )


@router.get("/current")
async def get_weather_by_coordinates(
    weather: WeatherServiceDep,
    settings: SettingsDep,
    lat: Annotated[str | None, Query(description="Latitude")] = None,
    lon: Annotated[str | None, Query(description="Longitude")] = None,
    units: UnitsQuery = Units.METRIC,
):
    """
    Get current weather for GPS coordinates.

    Used by the "My Location" button. The lookup is saved to history.
    """
    record = await weather.lookup_by_coordinates(lat, lon, units)
    return {"success": True, "data": _lookup_display(record, units, settings)}


@router.get("/forecast/{city}", response_model=ForecastResponse)
async def get_forecast(
    city: Annotated[str, Path(description="City name")],
    weather: WeatherServiceDep,
    units: UnitsQuery = Units.METRIC,
):
    """Get a 5-day forecast with one entry per day. Not saved to history."""
    city_name, days = await weather.forecast(city, units)
    return ForecastResponse(city=city_name, forecast=days)


@router.get("/{city}")
async def get_weather_by_city(
    city: Annotated[str, Path(description="City name")],
    weather: WeatherServiceDep,
    settings: SettingsDep,
    units: UnitsQuery = Units.METRIC,
):
    """
    Get current weather for a city.

    This is the main search endpoint; it must stay last so it does not
    shadow the fixed paths above. The lookup is saved to history.
    """
    record = await weather.lookup_by_city(city, units)
    return {"success": True, "data": _lookup_display(record, units, settings)}
