"""PostgreSQL strategy - drop and re-create foreign keys.

The engine renders each definition itself (``pg_get_constraintdef``), so
match type, referential actions, deferrability and ``NOT VALID`` survive
the round trip without re-deriving any syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import require_text

_INTROSPECT_SQL = """
SELECT
  nspname AS nspname,
  relname AS relname,
  conname AS conname,
  pg_get_constraintdef(pg_constraint.oid) AS constraintdef
FROM pg_constraint
INNER JOIN pg_class ON conrelid = pg_class.oid
INNER JOIN pg_namespace ON pg_namespace.oid = pg_class.relnamespace
WHERE contype = 'f'
ORDER BY nspname, relname, conname
""".strip()


def quote_identifier(name: str) -> str:
    """Double-quote an identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


@dataclass(frozen=True)
class PostgresForeignKey:
    """A PostgreSQL foreign key and its engine-rendered definition."""

    nspname: str
    relname: str
    conname: str
    constraintdef: str

    def __post_init__(self) -> None:
        require_text(self)

    @property
    def qualified_table(self) -> str:
        return f"{quote_identifier(self.nspname)}.{quote_identifier(self.relname)}"


def _map_row(row: dict[str, Any]) -> PostgresForeignKey:
    return PostgresForeignKey(
        nspname=row["nspname"],
        relname=row["relname"],
        conname=row["conname"],
        constraintdef=row["constraintdef"],
    )


class PostgresqlStrategy:
    """Foreign key strategy for PostgreSQL."""

    def introspect(self, connection: Any) -> list[PostgresForeignKey]:
        return query(connection, _INTROSPECT_SQL, _map_row)

    def render_disable(self, snapshot: PostgresForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.qualified_table} "
            f"DROP CONSTRAINT {quote_identifier(snapshot.conname)}"
        ]

    def render_enable(self, snapshot: PostgresForeignKey) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.qualified_table} "
            f"ADD CONSTRAINT {quote_identifier(snapshot.conname)} {snapshot.constraintdef}"
        ]
