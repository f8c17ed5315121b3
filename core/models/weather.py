# =============================================================================
# core/models/weather.py - Weather Record Schemas
# =============================================================================
# These models normalize OpenWeatherMap payloads and shape them for storage
# and for clients:
# - WeatherRecord: one weather snapshot (optionally carrying its storage id)
# - ForecastDay: one selected slot of the 5-day / 3-hour forecast
# - Units: the per-request unit system
#
# A WeatherRecord is the same structure whether it is fresh from the
# upstream API, sitting in the history table or saved as a favorite. Only
# the display functions differ.
# =============================================================================

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_ICON_URL = "http://openweathermap.org/img/wn"

# The forecast endpoint returns 40 slots (5 days x 8 three-hour slots).
FORECAST_SLOTS = 40
SLOTS_PER_DAY = 8


class Units(str, Enum):
    """
    Unit systems accepted by the API.

    The upstream API converts values itself, so the label is only passed
    through and used to pick the temperature glyph.
    """
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def symbol(self) -> str:
        return "°C" if self is Units.METRIC else "°F"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def capitalize_first(text: str) -> str:
    """Upper-case the first character only ("light rain" -> "Light rain")."""
    return text[:1].upper() + text[1:]


def icon_url(code: str, base_url: str = DEFAULT_ICON_URL) -> str:
    """Build the image URL for an upstream icon code."""
    return f"{base_url.rstrip('/')}/{code}@2x.png"


def _number(value: Any) -> float:
    """Coerce a possibly missing numeric field to a finite float, 0 on failure."""
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return number if math.isfinite(number) else 0


def _first_condition(payload: dict[str, Any]) -> dict[str, Any]:
    conditions = payload.get("weather") or []
    if conditions and isinstance(conditions[0], dict):
        return conditions[0]
    return {}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherRecord(BaseModel):
    """
    Normalized weather snapshot.

    Records are frozen: they are built once from an upstream payload (or
    read back from storage) and never modified.

    Example:
        record = WeatherRecord.from_upstream(response.json())
        if record.is_valid():
            await store.insert_one("search_history", record.to_document())
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(None, description="Storage-assigned identifier")
    city: str = ""
    country: str = ""
    temperature: int = 0
    feels_like: int = 0
    description: str = ""
    icon: str = Field("", description="Short upstream icon code, e.g. '10d'")
    humidity: int = 0
    wind_speed: float = 0.0
    pressure: int = 0
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_upstream(cls, payload: dict[str, Any]) -> "WeatherRecord":
        """
        Build a record from an OpenWeatherMap /weather response.

        Missing or null optional fields fall back to 0 or "" rather than
        raising, so a sparse payload still produces a record (which may then
        fail is_valid()).
        """
        main = payload.get("main") or {}
        wind = payload.get("wind") or {}
        sys_info = payload.get("sys") or {}
        condition = _first_condition(payload)

        return cls(
            city=payload.get("name") or "",
            country=sys_info.get("country") or "",
            temperature=round_half_up(_number(main.get("temp"))),
            feels_like=round_half_up(_number(main.get("feels_like"))),
            description=condition.get("description") or "",
            icon=condition.get("icon") or "",
            humidity=int(_number(main.get("humidity"))),
            wind_speed=_number(wind.get("speed")),
            pressure=int(_number(main.get("pressure"))),
        )

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "WeatherRecord":
        """Rebuild a record from a stored row, keeping its id."""
        data = {key: value for key, value in document.items() if value is not None}
        if "id" in data:
            data["id"] = str(data["id"])
        return cls.model_validate(data)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def is_valid(self) -> bool:
        """A record is storable only with a non-blank city, a description and an icon."""
        return bool(self.city.strip() and self.description and self.icon)

    # -------------------------------------------------------------------------
    # Representations
    # -------------------------------------------------------------------------

    def to_document(self) -> dict[str, Any]:
        """
        Convert to a storage document.

        The id is assigned by the store and is never written. Keys whose
        value is None or "" are dropped; numeric zeros are kept.
        """
        document = self.model_dump(mode="json", exclude={"id"})
        document["city"] = self.city.strip()
        return {
            key: value
            for key, value in document.items()
            if value is not None and value != ""
        }

    def to_display(
        self,
        units: Units | str = Units.METRIC,
        icon_base_url: str = DEFAULT_ICON_URL,
    ) -> dict[str, Any]:
        """Client-facing representation of a current-weather lookup or favorite."""
        display = {
            "city": self.city,
            "country": self.country,
            "temperature": self.temperature,
            "feelsLike": self.feels_like,
            "description": capitalize_first(self.description),
            "iconUrl": icon_url(self.icon, icon_base_url),
            "humidity": self.humidity,
            "windSpeed": self.wind_speed,
            "pressure": self.pressure,
            "units": Units(units).value,
        }
        if self.id is not None:
            display = {"id": self.id, **display}
        return display

    def to_history_display(
        self,
        units: Units | str = Units.METRIC,
        icon_base_url: str = DEFAULT_ICON_URL,
        tz: str = "UTC",
    ) -> dict[str, Any]:
        """
        Client-facing representation of a search history entry.

        Temperature carries the unit glyph ("31°C") and the timestamp is
        rendered in the short day/month/time style, e.g. "17 Oct, 02:30 pm".
        """
        return {
            "id": self.id,
            "city": self.city,
            "temperature": f"{self.temperature}{Units(units).symbol}",
            "description": capitalize_first(self.description),
            "iconUrl": icon_url(self.icon, icon_base_url),
            "time": format_short_time(self.timestamp, tz),
        }


def format_short_time(moment: datetime, tz: str = "UTC") -> str:
    """Format a timestamp as "17 Oct, 02:30 pm" in the given timezone."""
    local = moment.astimezone(ZoneInfo(tz))
    meridiem = "am" if local.hour < 12 else "pm"
    return f"{local.day} {local:%b}, {local:%I:%M} {meridiem}"


# =============================================================================
# Forecast
# =============================================================================

class ForecastDay(BaseModel):
    """
    One forecast slot, rendered for clients.

    Example:
        {"date": "Mon 5", "temp": 24, "icon": "http://.../10d@2x.png",
         "description": "light rain"}
    """

    date: str
    temp: int
    icon: str
    description: str

    @classmethod
    def from_slot(
        cls,
        slot: dict[str, Any],
        icon_base_url: str = DEFAULT_ICON_URL,
        tz: str = "UTC",
    ) -> "ForecastDay":
        condition = _first_condition(slot)
        moment = datetime.fromtimestamp(_number(slot.get("dt")), tz=timezone.utc)
        local = moment.astimezone(ZoneInfo(tz))
        return cls(
            date=f"{local:%a} {local.day}",
            temp=round_half_up(_number((slot.get("main") or {}).get("temp"))),
            icon=icon_url(condition.get("icon") or "", icon_base_url),
            description=condition.get("description") or "",
        )


def select_daily_slots(slots: list[Any]) -> list[Any]:
    """
    Keep one slot per day from a 3-hour forecast list.

    Takes indices 0, 8, 16, 24 and 32 of the first 40 slots. This picks the
    same time of day for each day; it is not a per-calendar-day aggregate.
    """
    return slots[:FORECAST_SLOTS][::SLOTS_PER_DAY]
