# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory stand-ins for the document store and the weather client
# - A TestClient wired to those stand-ins through dependency overrides
# =============================================================================

import asyncio
import os
import uuid
from datetime import datetime
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("OPENWEATHER_API_KEY", "test-openweather-key")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from lib.openweather_client import OpenWeatherError


# =============================================================================
# Upstream Payloads
# =============================================================================

def make_current_payload(
    city: str = "Mumbai",
    temp: float = 31.4,
    description: str = "haze",
    icon: str = "50d",
    country: str = "IN",
) -> dict[str, Any]:
    """A realistic OpenWeatherMap /weather response."""
    return {
        "coord": {"lon": 72.8479, "lat": 19.0144},
        "weather": [{"id": 721, "main": "Haze", "description": description, "icon": icon}],
        "main": {
            "temp": temp,
            "feels_like": temp + 3.6,
            "temp_min": temp - 1,
            "temp_max": temp + 1,
            "pressure": 1009,
            "humidity": 62,
        },
        "wind": {"speed": 4.12, "deg": 270},
        "dt": 1760690000,
        "sys": {"country": country, "sunrise": 1760660000, "sunset": 1760702000},
        "name": city,
        "cod": 200,
    }


def make_forecast_payload(city: str = "Mumbai", slots: int = 40) -> dict[str, Any]:
    """A /forecast response with `slots` three-hour entries."""
    start = 1760691600  # 2025-10-17 09:00 UTC
    return {
        "cod": "200",
        "cnt": slots,
        "list": [
            {
                "dt": start + index * 3 * 3600,
                "main": {"temp": 20 + index * 0.5},
                "weather": [{"description": f"slot {index}", "icon": "01d"}],
            }
            for index in range(slots)
        ],
        "city": {"name": city, "country": "IN"},
    }


# =============================================================================
# In-Memory Collaborators
# =============================================================================

class FakeDocumentStore:
    """
    In-memory version of DocumentStore.

    Mirrors its async interface and records every call in `calls`.
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])

    async def insert_one(self, table: str, document: dict[str, Any]) -> str:
        self.calls.append(("insert_one", table))
        document_id = str(uuid.uuid4())
        self.rows(table).append({"id": document_id, **document})
        return document_id

    async def find_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        self.calls.append(("find_one", table))
        for row in self.rows(table):
            if all(row.get(column) == value for column, value in filters.items()):
                return dict(row)
        return None

    async def find_many(
        self,
        table: str,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self.calls.append(("find_many", table))
        rows = [dict(row) for row in self.rows(table)]
        if order_by == "timestamp":
            rows.sort(
                key=lambda row: datetime.fromisoformat(row["timestamp"].replace("Z", "+00:00")),
                reverse=descending,
            )
        elif order_by:
            rows.sort(key=lambda row: row[order_by], reverse=descending)
        return rows[:limit] if limit is not None else rows

    async def delete_one(self, table: str, document_id: str) -> int:
        self.calls.append(("delete_one", table))
        before = len(self.rows(table))
        self.tables[table] = [row for row in self.rows(table) if row["id"] != document_id]
        return before - len(self.tables[table])

    async def delete_many(self, table: str) -> int:
        self.calls.append(("delete_many", table))
        deleted = len(self.rows(table))
        self.tables[table] = []
        return deleted

    async def ping(self, table: str) -> None:
        self.calls.append(("ping", table))

    async def close(self) -> None:
        self.calls.append(("close", None))


class FakeWeatherClient:
    """
    In-memory version of OpenWeatherClient.

    Cities not in `payloads` answer like the real API: HTTP 404
    "city not found". Each call yields to the event loop once, as a real
    network call would.
    """

    def __init__(self):
        self.payloads: dict[str, dict[str, Any]] = {}
        self.forecasts: dict[str, dict[str, Any]] = {}
        self.error: OpenWeatherError | None = None
        self.calls: list[tuple[str, Any, str]] = []

    async def _answer(self, source: dict[str, dict[str, Any]], key: str) -> dict[str, Any]:
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if key not in source:
            raise OpenWeatherError("city not found", status_code=404)
        return source[key]

    async def current_by_city(self, city: str, units: str = "metric") -> dict[str, Any]:
        self.calls.append(("current_by_city", city, units))
        return await self._answer(self.payloads, city)

    async def current_by_coordinates(self, lat: float, lon: float, units: str = "metric") -> dict[str, Any]:
        self.calls.append(("current_by_coordinates", (lat, lon), units))
        return await self._answer(self.payloads, f"{lat},{lon}")

    async def forecast_by_city(self, city: str, units: str = "metric") -> dict[str, Any]:
        self.calls.append(("forecast_by_city", city, units))
        return await self._answer(self.forecasts, city)

    async def close(self) -> None:
        pass


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Application settings built from the test environment."""
    return get_settings()


@pytest.fixture
def store():
    return FakeDocumentStore()


@pytest.fixture
def weather_client():
    client = FakeWeatherClient()
    client.payloads["Mumbai"] = make_current_payload("Mumbai", temp=31.4)
    client.payloads["Pune"] = make_current_payload("Pune", temp=27.5, description="scattered clouds", icon="03d")
    client.payloads["19.07,72.87"] = make_current_payload("Mumbai", temp=30.6)
    client.forecasts["Mumbai"] = make_forecast_payload("Mumbai")
    return client


@pytest.fixture
def client(store, weather_client):
    """
    TestClient with storage and upstream replaced by in-memory fakes.

    The lifespan is not entered, so no real connections are opened.
    """
    from app.dependencies import get_store, get_weather_client
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_weather_client] = lambda: weather_client
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
