# 📄 File: plantswap/shared/infrastructure/database/supabase_table.py
#
# 🧭 Purpose (Layman Explanation):
# A small helper that talks to one table of the hosted database: read rows, add a row,
# change rows and delete rows, turning backend failures into our own error type.
#
# 🧪 Purpose (Technical Summary):
# Async facade over the synchronous Supabase postgrest query builder. Each call runs in a
# worker thread (asyncio.to_thread) so the event loop is never blocked, and postgrest
# APIError and httpx transport errors are logged and re-raised as RepositoryError.
#
# 🔗 Dependencies:
# - supabase Client (postgrest query builder)
# - postgrest APIError, httpx transport errors
# - asyncio for thread offloading
#
# 🔄 Connected Modules / Calls From:
# - plantswap.modules.*.infrastructure.database.*_repository_impl (all row access)

"""
Supabase Table Gateway

Supports the row operations the repositories need:
- select with equality, inclusion and or-predicate filters
- ordering by a timestamp column
- insert returning the stored row
- update / delete scoped by equality filters
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx
from postgrest import APIError
from supabase import Client

from plantswap.shared.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class SupabaseTable:
    """
    Async access to a single Supabase table.

    Repositories own one instance per table and only deal in plain row
    dicts here; mapping to domain models stays in the repository.
    """

    def __init__(self, client: Client, table_name: str):
        self._client = client
        self.table_name = table_name

    async def select(
        self,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Iterable[Any]]] = None,
        or_: Optional[str] = None,
        order_by: Optional[str] = "created_at",
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch rows matching all given filters.

        Args:
            eq: column -> value equality filters
            in_: column -> allowed values
            or_: raw postgrest or-expression, e.g. ``sender_id.eq.x,receiver_id.eq.x``
            order_by: column to order by, None for backend order
            descending: order direction
            limit: max rows

        Returns:
            List of row dicts (possibly empty)
        """
        def run():
            query = self._client.table(self.table_name).select("*")
            for column, value in (eq or {}).items():
                query = query.eq(column, value)
            for column, values in (in_ or {}).items():
                query = query.in_(column, list(values))
            if or_:
                query = query.or_(or_)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit:
                query = query.limit(limit)
            return query.execute()

        response = await self._execute("select", run)
        return list(response.data or [])

    async def select_one(self, **eq: Any) -> Optional[Dict[str, Any]]:
        """Fetch a single row by equality filters, None if absent."""
        rows = await self.select(eq=eq, order_by=None, limit=1)
        return rows[0] if rows else None

    async def insert(self, row: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored by the backend."""
        def run():
            return self._client.table(self.table_name).insert(dict(row)).execute()

        response = await self._execute("insert", run)
        if not response.data:
            raise RepositoryError(
                f"Insert into {self.table_name} returned no row",
                table=self.table_name,
                operation="insert",
            )
        return response.data[0]

    async def update(self, values: Mapping[str, Any], **eq: Any) -> List[Dict[str, Any]]:
        """
        Update rows matching ``eq`` and return the updated rows.

        An empty filter set is refused so a bad call can never rewrite the
        whole table.
        """
        if not eq:
            raise RepositoryError(
                "Refusing to update without a filter",
                table=self.table_name,
                operation="update",
            )

        def run():
            query = self._client.table(self.table_name).update(dict(values))
            for column, value in eq.items():
                query = query.eq(column, value)
            return query.execute()

        response = await self._execute("update", run)
        return list(response.data or [])

    async def delete(self, **eq: Any) -> int:
        """Delete rows matching ``eq``; returns how many were removed."""
        if not eq:
            raise RepositoryError(
                "Refusing to delete without a filter",
                table=self.table_name,
                operation="delete",
            )

        def run():
            query = self._client.table(self.table_name).delete()
            for column, value in eq.items():
                query = query.eq(column, value)
            return query.execute()

        response = await self._execute("delete", run)
        return len(response.data or [])

    async def _execute(self, operation: str, run):
        try:
            return await asyncio.to_thread(run)
        except APIError as e:
            logger.error(f"Supabase {operation} on {self.table_name} failed: {e.message}")
            raise RepositoryError(
                f"Failed to {operation} {self.table_name}",
                table=self.table_name,
                operation=operation,
                original_error=e.message,
            ) from e
        except httpx.HTTPError as e:
            # Timeouts and refused connections surface as httpx errors, not APIError
            logger.error(f"Supabase {operation} on {self.table_name} unreachable: {type(e).__name__}: {e}")
            raise RepositoryError(
                f"Backend unreachable during {operation} on {self.table_name}",
                table=self.table_name,
                operation=operation,
                original_error=f"{type(e).__name__}: {e}",
            ) from e
