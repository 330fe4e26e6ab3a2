# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides the small set of row helpers every service builds on:
# - fetch_one: single row by column value (None when missing)
# - fetch_many: rows whose column is in a set of values
# - count_rows: exact row counts (used to reconcile follower/like counters)
# - insert_row / update_rows / delete_rows
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   project = SupabaseClient.fetch_one("projects", "public_slug", "my-app")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Iterable
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError, normalize_uuid

logger = logging.getLogger(__name__)

# PostgREST error code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(ApplicationError):
    """Error during Supabase operations."""

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        builder = SupabaseClient.fetch_one("builders", "user_id", user_id)
        followers = SupabaseClient.count_rows("follows", "project_id", project_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS), so
        services are responsible for ownership checks before writes.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_one(
        cls,
        table: str,
        column: str,
        value: str | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row where `column` equals `value`.

        Args:
            table: Table name
            column: Column to match on (e.g. "id", "user_id", "public_slug")
            value: Value to match
            columns: Select expression (default: all columns)

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        value_str = normalize_uuid(value)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq(column, value_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                suggestion=f"Check that the {table} table is accessible",
                details={"table": table, column: value_str}
            )

    @classmethod
    def fetch_many(
        cls,
        table: str,
        column: str,
        values: Iterable[str | UUID],
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """
        Fetch all rows whose `column` is one of `values`.

        Used to attach related records (builders to projects, projects to
        posts) in one round trip instead of one query per row.

        Returns:
            List of row dicts (empty when `values` is empty)
        """
        value_list = list(dict.fromkeys(normalize_uuid(v) for v in values if v))
        if not value_list:
            return []

        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .in_(column, value_list)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_MANY_FAILED",
                details={"table": table, "column": column, "count": len(value_list)}
            )

    @classmethod
    def count_rows(cls, table: str, column: str, value: str | UUID) -> int:
        """
        Count rows where `column` equals `value`.

        Returns:
            Exact row count
        """
        client = cls.get_client()
        value_str = normalize_uuid(value)

        try:
            response = (
                client.table(table)
                .select("id", count="exact")
                .eq(column, value_str)
                .execute()
            )
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count rows in {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table, column: value_str}
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated id and timestamps.

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_rows(
        cls,
        table: str,
        column: str,
        value: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update rows where `column` equals `value`.

        Returns:
            The first updated row, or None if nothing matched
        """
        client = cls.get_client()
        value_str = normalize_uuid(value)

        try:
            response = (
                client.table(table)
                .update(data)
                .eq(column, value_str)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, column: value_str}
            )

    @classmethod
    def delete_rows(cls, table: str, filters: dict[str, str | UUID]) -> int:
        """
        Delete rows matching all `filters` (column -> value equality).

        Returns:
            Number of rows deleted
        """
        if not filters:
            raise SupabaseClientError(
                message=f"Refusing to delete from {table} without filters",
                code="DELETE_UNFILTERED"
            )

        client = cls.get_client()
        query = client.table(table).delete()
        for column, value in filters.items():
            query = query.eq(column, normalize_uuid(value))

        try:
            response = query.execute()
            return len(response.data or [])

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, **{k: str(v) for k, v in filters.items()}}
            )
