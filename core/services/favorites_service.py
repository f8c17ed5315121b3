# =============================================================================
# core/services/favorites_service.py - Favorite Cities Business Logic
# =============================================================================
# Favorites are global. A city is considered already saved when a stored
# favorite has exactly the same city string (case-sensitive). The check and
# the insert are two separate storage calls, so two concurrent adds for the
# same city can both insert.
# =============================================================================

import logging

from app.config import Settings
from app.exceptions import FavoriteNotFoundError, IncompleteWeatherDataError, ValidationError
from core.models.weather import Units, WeatherRecord
from lib.openweather_client import OpenWeatherClient
from lib.supabase_client import DocumentStore
from lib.utils import normalize_uuid

logger = logging.getLogger(__name__)


class FavoritesService:
    """Service for the favorites table."""

    def __init__(
        self,
        store: DocumentStore,
        weather_client: OpenWeatherClient,
        settings: Settings,
    ):
        self.store = store
        self.weather_client = weather_client
        self.table = settings.FAVORITES_TABLE

    async def list_all(self) -> list[WeatherRecord]:
        """All favorites, oldest first."""
        rows = await self.store.find_many(self.table, order_by="timestamp")
        return [WeatherRecord.from_document(row) for row in rows]

    async def add(self, city: str) -> WeatherRecord | None:
        """
        Save a city as a favorite with fresh (metric) weather.

        Returns:
            The stored record, or None if the city was already a favorite
            (in which case nothing is fetched or written)
        """
        existing = await self.store.find_one(self.table, city=city)
        if existing:
            logger.debug(f"{city} is already a favorite ({existing.get('id')})")
            return None

        payload = await self.weather_client.current_by_city(city, units=Units.METRIC.value)
        record = WeatherRecord.from_upstream(payload)
        if not record.is_valid():
            raise IncompleteWeatherDataError(city)

        record_id = await self.store.insert_one(self.table, record.to_document())
        logger.info(f"Added favorite {record.city} as {record_id}")
        return record.model_copy(update={"id": record_id})

    async def remove(self, favorite_id: str) -> None:
        """
        Delete a favorite by id.

        Raises:
            ValidationError: If the id is malformed (no storage call is made)
            FavoriteNotFoundError: If no favorite has this id
        """
        normalized = normalize_uuid(favorite_id)
        if normalized is None:
            raise ValidationError(f"Invalid favorite id: {favorite_id}", details={"id": favorite_id})

        if await self.store.find_one(self.table, id=normalized) is None:
            raise FavoriteNotFoundError(normalized)

        await self.store.delete_one(self.table, normalized)
        logger.info(f"Removed favorite {normalized}")
