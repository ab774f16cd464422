"""Supabase client access.

Provides ``get_supabase()`` which returns a lazily-initialized, process-wide
Supabase client using credentials from ``settings``, and ``execute()`` which
runs a query builder and turns backend failures into ``DataAccessError``.
"""

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

from archconnect.core.config import settings
from archconnect.core.exceptions import DataAccessError

logger = logging.getLogger(__name__)

_client: Client | None = None


def get_supabase() -> Client:
    """Return the singleton Supabase client, creating it on first call."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def new_auth_client() -> Client:
    """Return a fresh client for one sign-in or sign-up exchange.

    A password sign-in stores the user's session on the client that performed
    it, so it must never run on the shared singleton.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def execute(query: Any, action: str) -> Any:
    """Execute a PostgREST query builder.

    *action* completes the sentence "Could not ..." and becomes the
    user-facing message of the ``DataAccessError`` raised on failure.
    """
    try:
        return query.execute()
    except Exception as exc:
        logger.error(
            "supabase_query_failed",
            extra={"action": action, "error_message": str(exc)},
        )
        raise DataAccessError(action, str(exc)) from exc


def row_exists(table: str, filters: dict[str, str], action: str) -> bool:
    """Return True when *table* has a row matching every column filter."""
    query = get_supabase().table(table).select("id")
    for column, value in filters.items():
        query = query.eq(column, value)
    result = execute(query.limit(1), action)
    return bool(result.data)


def count_rows(table: str, column: str, value: str, action: str) -> int:
    """Exact row count of *table* where *column* equals *value*."""
    result = execute(
        get_supabase()
        .table(table)
        .select("*", count="exact", head=True)
        .eq(column, value),
        action,
    )
    return result.count or 0
