"""Shared fixtures: an in-memory datastore and a test client wired to it."""
import copy
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from user_sync.config import Settings, get_settings
from user_sync.database import get_datastore
from user_sync.datastore import BaseDatastore
from user_sync.exceptions import DatastoreError
from user_sync.main import app

API_KEY = "test-api-key"


class FakeDatastore(BaseDatastore):
    """Tables kept in memory; ``users.email`` is unique like the real schema.
    
    ``failures`` maps ``(operation, table)`` to an exception raised on the next
    matching call.
    """
    
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {"users": [], "user_logins": []}
        self.calls: List[tuple] = []
        self.failures: Dict[tuple, Exception] = {}
    
    def _maybe_fail(self, operation: str, table: str) -> None:
        self.calls.append((operation, table))
        error = self.failures.pop((operation, table), None)
        if error is not None:
            raise error
    
    @staticmethod
    def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
        return all(row.get(column) == value for column, value in (filters or {}).items())
    
    async def select(self, table, columns="*", filters=None, limit=None):
        self._maybe_fail("select", table)
        rows = [row for row in self.tables[table] if self._matches(row, filters)]
        if limit is not None:
            rows = rows[:limit]
        if columns != "*":
            wanted = [column.strip() for column in columns.split(",")]
            rows = [{column: row.get(column) for column in wanted} for row in rows]
        return copy.deepcopy(rows)
    
    async def insert(self, table, rows, returning=True):
        self._maybe_fail("insert", table)
        for row in rows:
            if table == "users" and any(u["email"] == row["email"] for u in self.tables[table]):
                raise DatastoreError(
                    details='duplicate key value violates unique constraint "users_email_key"',
                    code=DatastoreError.UNIQUE_VIOLATION,
                )
            self.tables[table].append(copy.deepcopy(row))
        return copy.deepcopy(rows) if returning else []
    
    async def update(self, table, values, filters):
        self._maybe_fail("update", table)
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(copy.deepcopy(values))
                updated.append(copy.deepcopy(row))
        return updated
    
    def count(self, operation: str, table: str) -> int:
        return self.calls.count((operation, table))


@pytest.fixture
def datastore():
    return FakeDatastore()


@pytest.fixture
def settings():
    return Settings(api_key=API_KEY, supabase_url="https://example.supabase.co")


@pytest.fixture
def client(datastore, settings):
    app.dependency_overrides[get_datastore] = lambda: datastore
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"x-api-key": API_KEY}
