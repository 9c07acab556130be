"""Supabase connector built on the supabase-py SDK."""
import logging
import time
from typing import Any, Dict, List, Optional
import httpx
from postgrest.exceptions import APIError
from postgrest.types import ReturnMethod
from supabase import AsyncClient, AsyncClientOptions, acreate_client
from user_sync.datastore import BaseDatastore
from user_sync.exceptions import DatastoreError

logger = logging.getLogger(__name__)


class SupabaseClient(BaseDatastore):
    """Table access through an ``AsyncClient`` from the Supabase SDK.
    
    One instance is created at startup with ``SupabaseClient.create`` and
    shared by all requests.
    """
    
    def __init__(self, client: AsyncClient, ping_table: str = "users"):
        self._client = client
        self.ping_table = ping_table
    
    @classmethod
    async def create(
        cls,
        url: str,
        service_key: str,
        timeout: Optional[float] = None,
        ping_table: str = "users",
    ) -> "SupabaseClient":
        """Create the SDK client; auth sessions are not needed with a service key."""
        options = AsyncClientOptions(auto_refresh_token=False, persist_session=False)
        if timeout is not None:
            options.postgrest_client_timeout = timeout
        client = await acreate_client(url, service_key, options=options)
        return cls(client, ping_table=ping_table)
    
    async def _execute(self, operation: str, table: str, query) -> List[Dict[str, Any]]:
        """Run a query builder and turn SDK failures into DatastoreError."""
        try:
            response = await query.execute()
        except APIError as e:
            message = e.message or str(e)
            logger.error("Supabase %s %s failed (%s): %s", operation, table, e.code, message)
            raise DatastoreError(details=message, code=e.code) from e
        except httpx.HTTPError as e:
            logger.error("Supabase %s %s failed: %s", operation, table, e)
            raise DatastoreError(details=str(e) or e.__class__.__name__) from e
        return response.data or []
    
    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.table(table).select(*[column.strip() for column in columns.split(",")])
        for column, value in (filters or {}).items():
            query = query.eq(column, value)
        if limit is not None:
            query = query.limit(limit)
        return await self._execute("select", table, query)
    
    async def insert(
        self,
        table: str,
        rows: List[Dict[str, Any]],
        returning: bool = True,
    ) -> List[Dict[str, Any]]:
        returning_method = ReturnMethod.representation if returning else ReturnMethod.minimal
        query = self._client.table(table).insert(rows, returning=returning_method)
        result = await self._execute("insert", table, query)
        return result if returning else []
    
    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        query = self._client.table(table).update(values)
        for column, value in filters.items():
            query = query.eq(column, value)
        return await self._execute("update", table, query)
    
    async def ping(self) -> tuple[bool, str, float]:
        """Test connection to Supabase by reading one row."""
        start_time = time.time()
        try:
            await self._client.table(self.ping_table).select("*").limit(1).execute()
            latency = (time.time() - start_time) * 1000
            return True, "Connected. Supabase REST API is ready.", latency
        except httpx.TimeoutException:
            latency = (time.time() - start_time) * 1000
            return False, "Connection timeout", latency
        except APIError as e:
            latency = (time.time() - start_time) * 1000
            return False, f"Connection failed: {e.message or e.code}", latency
        except httpx.HTTPError as e:
            latency = (time.time() - start_time) * 1000
            return False, f"Connection error: {str(e)}", latency
    
    async def aclose(self) -> None:
        await self._client.postgrest.aclose()
