"""SQLite strategy - connection-level ``foreign_keys`` pragma.

The pragma is ignored inside an open transaction, so the batch helper
commits pending work before toggling it.
"""

from __future__ import annotations

from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import SessionSnapshot

_ALL_CONSTRAINTS = SessionSnapshot("sqlite")


def _map_row(row: dict[str, Any]) -> bool:
    return bool(row["foreign_keys"])


class SqliteStrategy:
    """Foreign key strategy for SQLite.

    Enforcement is off by default on SQLite connections; when it is already
    off nothing is captured, so enabling later leaves it off.
    """

    def introspect(self, connection: Any) -> list[SessionSnapshot]:
        enforced = query(connection, "PRAGMA foreign_keys", _map_row)
        if enforced and enforced[0]:
            return [_ALL_CONSTRAINTS]
        return []

    def render_disable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["PRAGMA foreign_keys = OFF"]

    def render_enable(self, snapshot: SessionSnapshot) -> list[str]:
        return ["PRAGMA foreign_keys = ON"]
