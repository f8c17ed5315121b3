# =============================================================================
# core/services/history_service.py - Search History Business Logic
# =============================================================================
# Every successful current-weather lookup is recorded here. History is
# global (not per user), read newest-first and only ever cleared in bulk.
# =============================================================================

import logging

from app.config import Settings
from app.exceptions import IncompleteWeatherDataError
from core.models.weather import WeatherRecord
from lib.supabase_client import DocumentStore

logger = logging.getLogger(__name__)


class HistoryService:
    """Service for the search history table."""

    def __init__(self, store: DocumentStore, settings: Settings):
        self.store = store
        self.table = settings.HISTORY_TABLE
        self.limit = settings.HISTORY_LIMIT

    async def record(self, record: WeatherRecord) -> WeatherRecord:
        """
        Persist one lookup.

        Returns:
            The same record carrying its new id

        Raises:
            IncompleteWeatherDataError: If the record fails is_valid()
        """
        if not record.is_valid():
            raise IncompleteWeatherDataError(record.city)

        record_id = await self.store.insert_one(self.table, record.to_document())
        logger.info(f"Recorded lookup for {record.city} as {record_id}")
        return record.model_copy(update={"id": record_id})

    async def list_recent(self) -> list[WeatherRecord]:
        """Most recent lookups, newest first, capped at HISTORY_LIMIT."""
        rows = await self.store.find_many(
            self.table,
            order_by="timestamp",
            descending=True,
            limit=self.limit,
        )
        return [WeatherRecord.from_document(row) for row in rows]

    async def clear(self) -> int:
        """Delete every history entry. Returns the number removed."""
        deleted = await self.store.delete_many(self.table)
        logger.info(f"Cleared search history ({deleted} entries)")
        return deleted
