"""Shared fixtures: isolated settings and fresh singletons for every test."""

from types import SimpleNamespace

import pytest

from linkstash.auth.dependencies import reset_jwks_cache
from linkstash.config import reset_settings
from linkstash.db.supabase import reset_clients
from linkstash.services.classifier.classifier import reset_link_classifier
from linkstash.services.link_pipeline import reset_link_pipeline


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Start each test unconfigured, independent of any local .env file."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_KEY", "")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "")
    for reset in (
        reset_settings,
        reset_clients,
        reset_link_classifier,
        reset_link_pipeline,
        reset_jwks_cache,
    ):
        reset()
    yield
    reset_settings()
    reset_clients()
    reset_link_classifier()
    reset_link_pipeline()


class FakeQuery:
    """Minimal stand-in for a supabase-py query builder over an in-memory table."""

    def __init__(self, table: "FakeTable", action: str = "select", payload=None):
        self.table = table
        self.action = action
        self.payload = payload
        self.filters: list = []
        self.limit_n = None
        self.order_by = None

    def select(self, *_):
        self.action = "select"
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self

    def lte(self, column, value):
        self.filters.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self

    def contains(self, column, values):
        self.filters.append(lambda row: set(values) <= set(row.get(column) or []))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def _matching(self):
        return [row for row in self.table.rows if all(f(row) for f in self.filters)]

    async def execute(self):
        return SimpleNamespace(data=self.table.run(self))


class FakeTable:
    def __init__(self, name: str):
        self.name = name
        self.rows: list[dict] = []
        self._next_id = 1

    def run(self, query: FakeQuery) -> list[dict]:
        if query.action == "insert":
            row = {
                "id": f"{self.name}-{self._next_id}",
                "created_at": f"2025-01-01T00:00:{self._next_id:02d}+00:00",
                "updated_at": f"2025-01-01T00:00:{self._next_id:02d}+00:00",
                **query.payload,
            }
            self._next_id += 1
            self.rows.append(row)
            return [dict(row)]

        matching = query._matching()
        if query.action == "update":
            for row in matching:
                row.update(query.payload)
            return [dict(row) for row in matching]
        if query.action == "delete":
            self.rows = [row for row in self.rows if row not in matching]
            return [dict(row) for row in matching]

        if query.order_by:
            column, desc = query.order_by
            matching = sorted(matching, key=lambda r: r.get(column) or "", reverse=desc)
        if query.limit_n is not None:
            matching = matching[: query.limit_n]
        return [dict(row) for row in matching]


class FakeSupabase:
    """In-memory async Supabase client exposing only ``table(...)``."""

    def __init__(self):
        self.tables: dict[str, FakeTable] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, FakeTable(name)))

    def rows(self, name: str) -> list[dict]:
        return self.tables.setdefault(name, FakeTable(name)).rows


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()
