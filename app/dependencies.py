# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The storage and upstream clients are created once in the app lifespan and
# kept on app.state; handlers receive them through Depends() rather than
# importing a module-level connection.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings, get_settings
from core.services.favorites_service import FavoritesService
from core.services.history_service import HistoryService
from core.services.weather_service import WeatherService
from lib.openweather_client import OpenWeatherClient
from lib.supabase_client import DocumentStore


def get_app_settings() -> Settings:
    """Get the cached settings instance."""
    return get_settings()


def get_store(request: Request) -> DocumentStore:
    """Get the document store opened at startup."""
    return request.app.state.store


def get_weather_client(request: Request) -> OpenWeatherClient:
    """Get the upstream weather client opened at startup."""
    return request.app.state.weather_client


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
StoreDep = Annotated[DocumentStore, Depends(get_store)]
WeatherClientDep = Annotated[OpenWeatherClient, Depends(get_weather_client)]


def get_history_service(store: StoreDep, settings: SettingsDep) -> HistoryService:
    return HistoryService(store, settings)


def get_weather_service(
    weather_client: WeatherClientDep,
    history: Annotated[HistoryService, Depends(get_history_service)],
    settings: SettingsDep,
) -> WeatherService:
    return WeatherService(weather_client, history, settings)


def get_favorites_service(
    store: StoreDep,
    weather_client: WeatherClientDep,
    settings: SettingsDep,
) -> FavoritesService:
    return FavoritesService(store, weather_client, settings)


HistoryServiceDep = Annotated[HistoryService, Depends(get_history_service)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
FavoritesServiceDep = Annotated[FavoritesService, Depends(get_favorites_service)]
