# =============================================================================
# lib/supabase_client.py - Supabase Document Store
# =============================================================================
# This module wraps the async Supabase client behind a small collection-style
# interface used by the services:
# - insert_one: insert a document, return its generated id
# - find_one: first document matching an equality filter
# - find_many: documents with optional sort and limit
# - delete_one: delete by id, return the number of rows removed
# - delete_many: delete every document in a table
#
# Every method is a single PostgREST request; there are no transactions.
# Each table is expected to have a generated uuid "id" primary key plus the
# weather columns (see WeatherRecord.to_document).
#
# Usage:
#   store = await DocumentStore.connect(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   record_id = await store.insert_one("favorites", {"city": "Pune", ...})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import AsyncClient, acreate_client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: what failed, and where to look.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DocumentStore:
    """
    Collection-style wrapper for Supabase tables.

    One instance is created at application startup and passed to the
    services; nothing in this module holds global state.

    Example:
        rows = await store.find_many("search_history", order_by="timestamp", descending=True, limit=10)
    """

    def __init__(self, client: AsyncClient):
        self._client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> "DocumentStore":
        """
        Create the async Supabase client.

        Uses the service_role key, which bypasses Row Level Security.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = await acreate_client(url, key)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
            ) from e
        logger.info("Supabase client initialized successfully")
        return cls(client)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def insert_one(self, table: str, document: dict[str, Any]) -> str:
        """
        Insert one document.

        Returns:
            The id generated by the database

        Raises:
            SupabaseClientError: If the insert fails or returns no row
        """
        try:
            response = await self._client.table(table).insert(document).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_FAILED",
                suggestion="Check that the table returns the inserted row (default PostgREST behavior)",
                details={"table": table},
            )

        inserted_id = str(response.data[0]["id"])
        logger.debug(f"Inserted {inserted_id} into {table}")
        return inserted_id

    async def delete_one(self, table: str, document_id: str) -> int:
        """Delete the document with the given id. Returns rows deleted (0 or 1)."""
        try:
            response = await self._client.table(table).delete().eq("id", document_id).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": document_id},
            ) from e
        return len(response.data or [])

    async def delete_many(self, table: str) -> int:
        """Delete every document in the table. Returns rows deleted."""
        try:
            # PostgREST refuses an unfiltered DELETE; "id is not null" matches every row.
            response = await self._client.table(table).delete().not_.is_("id", "null").execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to clear {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table},
            ) from e
        return len(response.data or [])

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def find_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        """
        Fetch the first document matching all equality filters.

        Returns:
            The document, or None if nothing matches
        """
        query = self._client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = await query.limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": filters},
            ) from e

        rows = response.data or []
        return rows[0] if rows else None

    async def find_many(
        self,
        table: str,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch documents, optionally sorted and capped."""
        query = self._client.table(table).select("*")
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)

        try:
            response = await query.execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "order_by": order_by, "limit": limit},
            ) from e

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows

    async def ping(self, table: str) -> None:
        """Cheap round trip used by the readiness check."""
        await self.find_many(table, limit=1)

    async def close(self) -> None:
        """Close the PostgREST HTTP session held by the client."""
        await self._client.postgrest.aclose()
        logger.info("Supabase client closed")
