# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# - weather.py: WeatherRecord (lookups, history, favorites) and ForecastDay
# =============================================================================

from .weather import (
    ForecastDay,
    Units,
    WeatherRecord,
    format_short_time,
    icon_url,
    select_daily_slots,
)

__all__ = [
    "ForecastDay",
    "Units",
    "WeatherRecord",
    "format_short_time",
    "icon_url",
    "select_daily_slots",
]
