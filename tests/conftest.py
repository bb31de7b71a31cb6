"""
Root test configuration and fixtures for studentvote.

Provides a small synthetic roster and a fake Supabase async client so no test
reaches the network.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from studentvote.roster import RosterEntry  # noqa: E402

SAMPLE_RECORDS: list[dict[str, Any]] = [
    {"nom": "MOUTTALI BILAL", "matricule": "X1", "gp": "1", "sgp": "A"},
    {"nom": "ALAMI SARA", "matricule": "X2", "gp": "1", "sgp": "B"},
]


class FakeQuery:
    """Chainable stand-in for a postgrest request builder.

    Every filter call is recorded; `execute()` returns the configured response
    or raises the configured error.
    """

    def __init__(self, data: Any = None, error: Exception | None = None):
        self.data = data
        self.error = error
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def _record(self, name: str, *args: Any) -> FakeQuery:
        self.calls.append((name, args))
        return self

    def select(self, *args: Any) -> FakeQuery:
        return self._record("select", *args)

    def eq(self, *args: Any) -> FakeQuery:
        return self._record("eq", *args)

    def limit(self, *args: Any) -> FakeQuery:
        return self._record("limit", *args)

    def neq(self, *args: Any) -> FakeQuery:
        return self._record("neq", *args)

    def order(self, *args: Any) -> FakeQuery:
        return self._record("order", *args)

    def insert(self, *args: Any) -> FakeQuery:
        return self._record("insert", *args)

    def update(self, *args: Any) -> FakeQuery:
        return self._record("update", *args)

    def delete(self) -> FakeQuery:
        return self._record("delete")

    async def execute(self) -> Mock:
        if self.error is not None:
            raise self.error
        return Mock(data=self.data)


class FakeSupabaseClient:
    """Minimal AsyncClient: `table(name)` and `rpc(fn, params)` hand out queued FakeQuery objects."""

    def __init__(self) -> None:
        self.tables: dict[str, list[FakeQuery]] = {}
        self.rpcs: dict[str, FakeQuery] = {}
        self.table_calls: list[str] = []
        self.rpc_calls: list[tuple[str, dict[str, Any]]] = []

    def queue(self, table: str, data: Any = None, error: Exception | None = None) -> FakeQuery:
        query = FakeQuery(data, error)
        self.tables.setdefault(table, []).append(query)
        return query

    def set_rpc(self, fn: str, data: Any = None, error: Exception | None = None) -> FakeQuery:
        query = FakeQuery(data, error)
        self.rpcs[fn] = query
        return query

    def table(self, name: str) -> FakeQuery:
        self.table_calls.append(name)
        queued = self.tables.get(name)
        if not queued:
            raise AssertionError(f"Unexpected query on table {name!r}")
        return queued.pop(0)

    def rpc(self, fn: str, params: dict[str, Any]) -> FakeQuery:
        self.rpc_calls.append((fn, params))
        return self.rpcs[fn]


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """Raw roster records as stored in etudiant.json."""
    return [dict(r) for r in SAMPLE_RECORDS]


@pytest.fixture
def sample_roster() -> tuple[RosterEntry, ...]:
    """Two-student roster used by the end-to-end scenarios."""
    return tuple(RosterEntry.from_record(r) for r in SAMPLE_RECORDS)


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    return FakeSupabaseClient()
