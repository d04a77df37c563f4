"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest


class FakeCursor:
    """DB-API cursor double returning scripted rows and raising scripted errors."""

    def __init__(self, connection: FakeConnection) -> None:
        self._connection = connection
        self.description: list[tuple[str]] | None = None
        self._rows: list[tuple[Any, ...]] = []
        self.closed = False

    def execute(self, sql: str, params: Any = None) -> None:
        self._connection.executed.append(sql)
        for fragment, error in self._connection.failures.items():
            if fragment in sql:
                raise error
        self.description = None
        self._rows = []
        for fragment, (columns, rows) in self._connection.results.items():
            if fragment in sql:
                self.description = [(column,) for column in columns]
                self._rows = [tuple(row) for row in rows]
                break

    def fetchall(self) -> list[tuple[Any, ...]]:
        return list(self._rows)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """DB-API connection double recording every statement.

    Args:
        url: Exposed as ``connection.url`` for vendor detection.
        results: SQL fragment -> (column labels, rows) for queries.
        failures: SQL fragment -> exception raised when executed.
    """

    def __init__(
        self,
        url: str | None = "jdbc:postgresql://localhost:5432/test",
        results: dict[str, tuple[list[str], list[tuple[Any, ...]]]] | None = None,
        failures: dict[str, Exception] | None = None,
    ) -> None:
        if url is not None:
            self.url = url
        self.results = results or {}
        self.failures = failures or {}
        self.executed: list[str] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True


class RecordingStrategy:
    """Vendor strategy double rendering one readable statement per snapshot."""

    def __init__(self, snapshots: list[str] | None = None) -> None:
        self.snapshots = ["fk_a", "fk_b"] if snapshots is None else snapshots
        self.introspections = 0

    def introspect(self, connection: Any) -> list[str]:
        self.introspections += 1
        return list(self.snapshots)

    def render_disable(self, snapshot: str) -> list[str]:
        return [f"DROP {snapshot}"]

    def render_enable(self, snapshot: str) -> list[str]:
        return [f"ADD {snapshot}"]


@pytest.fixture
def make_connection():
    """Factory for recording DB-API connection doubles.

    Usage:
        conn = make_connection(url="jdbc:mysql://localhost/db", failures={"DROP": err})
    """

    def _make(**kwargs: Any) -> FakeConnection:
        return FakeConnection(**kwargs)

    return _make


@pytest.fixture
def connection(make_connection) -> FakeConnection:
    """Recording connection reporting a PostgreSQL URL."""
    return make_connection()


@pytest.fixture
def make_strategy():
    """Factory for recording vendor strategies."""

    def _make(snapshots: list[str] | None = None) -> RecordingStrategy:
        return RecordingStrategy(snapshots)

    return _make


@pytest.fixture
def sqlite_connection() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database with enforced foreign keys and a parent/child schema."""
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    conn.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL, "
        "FOREIGN KEY (user_id) REFERENCES users(id))"
    )
    conn.commit()
    yield conn
    conn.close()
