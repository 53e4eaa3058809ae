"""
Shared test fixtures.

Provides an in-memory Supabase stand-in whose query builder honours the
filters the services use (eq, in_, order, limit), so reads reflect earlier
writes within a test.
"""

import os
import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

# Settings are loaded at import time; provide the required values
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import pytest
from unittest.mock import patch
from datetime import datetime, timezone
from typing import Generator
from uuid import uuid4


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """Chainable query builder over one in-memory table."""

    def __init__(self, client: "MockSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._operation = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None

    # Operations

    def select(self, *args, **kwargs):
        self._operation = "select"
        return self

    def insert(self, data):
        self._operation = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._operation = "update"
        self._payload = data
        return self

    def delete(self):
        self._operation = "delete"
        return self

    # Filters

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def range(self, start, end):
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row: dict) -> bool:
        return all(f(row) for f in self._filters)

    def execute(self) -> MockSupabaseResponse:
        rows = self._client._rows(self._table)

        if self._operation == "insert":
            if self._client._consume_insert_failure(self._table):
                raise RuntimeError("simulated insert failure")
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            created = []
            for item in payload:
                row = dict(item)
                row.setdefault("id", str(uuid4()))
                row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(row)
                created.append(dict(row))
            return MockSupabaseResponse(data=created)

        if self._operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self._payload)
                    updated.append(dict(row))
            return MockSupabaseResponse(data=updated)

        if self._operation == "delete":
            kept = [row for row in rows if not self._matches(row)]
            removed = [dict(row) for row in rows if self._matches(row)]
            rows[:] = kept
            return MockSupabaseResponse(data=removed)

        data = [dict(row) for row in rows if self._matches(row)]
        if self._order:
            column, desc = self._order
            data.sort(key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        count = len(data)
        if self._limit is not None:
            data = data[:self._limit]
        return MockSupabaseResponse(data=data, count=count)


class MockSupabaseClient:
    """In-memory Supabase client."""

    def __init__(self):
        self._tables: dict[str, list] = {}
        self._insert_failures: dict[str, int] = {}

    def set_table_data(self, table_name: str, data: list):
        """Replace a table's rows."""
        self._tables[table_name] = [dict(row) for row in data]

    def get_table_data(self, table_name: str) -> list:
        """Current rows of a table."""
        return self._rows(table_name)

    def fail_next_inserts(self, table_name: str, count: int):
        """Make the next `count` inserts into a table raise."""
        self._insert_failures[table_name] = count

    def _consume_insert_failure(self, table_name: str) -> bool:
        remaining = self._insert_failures.get(table_name, 0)
        if remaining > 0:
            self._insert_failures[table_name] = remaining - 1
            return True
        return False

    def _rows(self, table_name: str) -> list:
        return self._tables.setdefault(table_name, [])

    def table(self, name: str) -> MockSupabaseQuery:
        return MockSupabaseQuery(self, name)


# ===================
# FIXTURES
# ===================

SERVICE_MODULES = (
    ("services.supplier_service", "_supplier_service"),
    ("services.store_service", "_store_service"),
    ("services.ledger_service", "_ledger_service"),
    ("services.supplier_alert_service", "_supplier_alert_service"),
    ("services.order_plan_service", "_order_plan_service"),
)


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create an in-memory Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("suppliers", [...])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase, monkeypatch) -> Generator:
    """
    Point every service at the in-memory client.

    Service singletons are reset so each test gets fresh instances bound
    to this test's client.
    """
    import importlib

    for module_name, singleton in SERVICE_MODULES:
        module = importlib.import_module(module_name)
        monkeypatch.setattr(module, singleton, None)

    with patch("config.database.get_supabase_client", return_value=mock_supabase), \
         patch("services.supplier_service.get_supabase_client", return_value=mock_supabase), \
         patch("services.store_service.get_supabase_client", return_value=mock_supabase), \
         patch("services.ledger_service.get_supabase_client", return_value=mock_supabase):
        yield mock_supabase


@pytest.fixture
def no_sleep():
    """Skip ledger retry backoff sleeps."""
    with patch("services.ledger_service.time.sleep") as sleep:
        yield sleep


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_db):
    """
    FastAPI test client backed by the in-memory database.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("stores", [...])
            response = test_client_with_mock_db.get("/api/stores/s1/supplier-alerts")
    """
    from fastapi.testclient import TestClient
    from main import app

    with patch("main.check_connection", return_value={"status": "healthy", "suppliers_count": 0, "stores_count": 0}):
        yield TestClient(app)
