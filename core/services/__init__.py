# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .favorites_service import FavoritesService
from .history_service import HistoryService
from .weather_service import WeatherService

__all__ = [
    "FavoritesService",
    "HistoryService",
    "WeatherService",
]
