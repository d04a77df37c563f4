"""Microsoft SQL Server strategy - toggle foreign keys in place.

Identifiers come back already quoted (``QUOTENAME``) from the catalog.
Re-enabling uses ``WITH CHECK`` so the constraint is trusted again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import require_text

_INTROSPECT_SQL = """
SELECT
  QUOTENAME(fk.name) AS constraint_name,
  QUOTENAME(cs.name) AS table_schema,
  QUOTENAME(ct.name) AS table_name
FROM sys.foreign_keys AS fk
INNER JOIN sys.tables AS ct ON fk.parent_object_id = ct.object_id
INNER JOIN sys.schemas AS cs ON ct.schema_id = cs.schema_id
WHERE fk.is_disabled = 0
ORDER BY cs.name, ct.name, fk.name
""".strip()


@dataclass(frozen=True)
class MssqlForeignKey:
    constraint_name: str
    table_schema: str
    table_name: str

    def __post_init__(self) -> None:
        require_text(self)


def _map_row(row: dict[str, Any]) -> MssqlForeignKey:
    return MssqlForeignKey(
        constraint_name=row["constraint_name"],
        table_schema=row["table_schema"],
        table_name=row["table_name"],
    )


class MssqlStrategy:
    """Foreign key strategy for Microsoft SQL Server."""

    def introspect(self, connection: Any) -> list[MssqlForeignKey]:
        return query(connection, _INTROSPECT_SQL, _map_row)

    def render_disable(self, snapshot: MssqlForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"NOCHECK CONSTRAINT {snapshot.constraint_name}"
        ]

    def render_enable(self, snapshot: MssqlForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"WITH CHECK CHECK CONSTRAINT {snapshot.constraint_name}"
        ]
