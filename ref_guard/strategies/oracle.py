"""Oracle strategy - toggle foreign keys in place.

Disabled constraints keep their definition server side, so only the
constraint and table names are captured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import require_text

_INTROSPECT_SQL = """
SELECT
  UC.CONSTRAINT_NAME AS CONSTRAINT_NAME,
  UC.TABLE_NAME AS TABLE_NAME
FROM USER_CONSTRAINTS UC
WHERE UC.CONSTRAINT_TYPE = 'R'
AND UC.STATUS = 'ENABLED'
ORDER BY UC.TABLE_NAME, UC.CONSTRAINT_NAME
""".strip()


def _quote(name: str) -> str:
    # Catalog names are stored with their exact case.
    return '"' + name.replace('"', '""') + '"'


@dataclass(frozen=True)
class OracleForeignKey:
    constraint_name: str
    table_name: str

    def __post_init__(self) -> None:
        require_text(self)


def _map_row(row: dict[str, Any]) -> OracleForeignKey:
    return OracleForeignKey(
        constraint_name=row["constraint_name"],
        table_name=row["table_name"],
    )


class OracleStrategy:
    """Foreign key strategy for Oracle."""

    def introspect(self, connection: Any) -> list[OracleForeignKey]:
        return query(connection, _INTROSPECT_SQL, _map_row)

    def render_disable(self, snapshot: OracleForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {_quote(snapshot.table_name)} "
            f"DISABLE CONSTRAINT {_quote(snapshot.constraint_name)}"
        ]

    def render_enable(self, snapshot: OracleForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {_quote(snapshot.table_name)} "
            f"ENABLE CONSTRAINT {_quote(snapshot.constraint_name)}"
        ]
