"""Generic strategy over the SQL-standard ``INFORMATION_SCHEMA`` views.

Usable with any engine exposing ``REFERENTIAL_CONSTRAINTS``,
``TABLE_CONSTRAINTS`` and ``KEY_COLUMN_USAGE`` along with a
``GROUP_CONCAT`` aggregate. Identifiers are passed through verbatim.
"""

from __future__ import annotations

from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import ForeignKeyConstraint

_INTROSPECT_SQL = """
SELECT
  KCU1.CONSTRAINT_SCHEMA AS CONSTRAINT_SCHEMA,
  KCU1.CONSTRAINT_NAME AS CONSTRAINT_NAME,
  KCU1.TABLE_SCHEMA AS TABLE_SCHEMA,
  KCU1.TABLE_NAME AS TABLE_NAME,
  GROUP_CONCAT(KCU1.COLUMN_NAME ORDER BY KCU1.ORDINAL_POSITION) AS TABLE_COLUMNS,
  KCU2.TABLE_SCHEMA AS REFERENCED_TABLE_SCHEMA,
  KCU2.TABLE_NAME AS REFERENCED_TABLE_NAME,
  GROUP_CONCAT(KCU2.COLUMN_NAME ORDER BY KCU2.ORDINAL_POSITION) AS REFERENCED_COLUMNS,
  RC.UPDATE_RULE AS UPDATE_RULE,
  RC.DELETE_RULE AS DELETE_RULE,
  CASE
    WHEN TC.IS_DEFERRABLE = 'NO' THEN 'NOT DEFERRABLE'
    ELSE 'DEFERRABLE'
  END AS DEFERRABILITY
FROM INFORMATION_SCHEMA.REFERENTIAL_CONSTRAINTS AS RC
INNER JOIN INFORMATION_SCHEMA.TABLE_CONSTRAINTS AS TC
  ON TC.CONSTRAINT_CATALOG = RC.CONSTRAINT_CATALOG
  AND TC.CONSTRAINT_SCHEMA = RC.CONSTRAINT_SCHEMA
  AND TC.CONSTRAINT_NAME = RC.CONSTRAINT_NAME
INNER JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS KCU1
  ON KCU1.CONSTRAINT_CATALOG = RC.CONSTRAINT_CATALOG
  AND KCU1.CONSTRAINT_SCHEMA = RC.CONSTRAINT_SCHEMA
  AND KCU1.CONSTRAINT_NAME = RC.CONSTRAINT_NAME
INNER JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE AS KCU2
  ON KCU2.CONSTRAINT_CATALOG = RC.UNIQUE_CONSTRAINT_CATALOG
  AND KCU2.CONSTRAINT_SCHEMA = RC.UNIQUE_CONSTRAINT_SCHEMA
  AND KCU2.CONSTRAINT_NAME = RC.UNIQUE_CONSTRAINT_NAME
  AND KCU2.ORDINAL_POSITION = KCU1.ORDINAL_POSITION
GROUP BY
  KCU1.CONSTRAINT_SCHEMA,
  KCU1.CONSTRAINT_NAME,
  KCU1.TABLE_SCHEMA,
  KCU1.TABLE_NAME,
  KCU2.TABLE_SCHEMA,
  KCU2.TABLE_NAME,
  RC.UPDATE_RULE,
  RC.DELETE_RULE,
  TC.IS_DEFERRABLE
ORDER BY KCU1.CONSTRAINT_SCHEMA, KCU1.TABLE_NAME, KCU1.CONSTRAINT_NAME
""".strip()


def _map_row(row: dict[str, Any]) -> ForeignKeyConstraint:
    return ForeignKeyConstraint(
        constraint_schema=row["constraint_schema"],
        constraint_name=row["constraint_name"],
        table_schema=row["table_schema"],
        table_name=row["table_name"],
        columns=row["table_columns"],
        referenced_table_schema=row["referenced_table_schema"],
        referenced_table_name=row["referenced_table_name"],
        referenced_columns=row["referenced_columns"],
        update_rule=row["update_rule"],
        delete_rule=row["delete_rule"],
        deferrable=row["deferrability"],
    )


class InformationSchemaStrategy:
    """Foreign key strategy for engines implementing ``INFORMATION_SCHEMA``."""

    def introspect(self, connection: Any) -> list[ForeignKeyConstraint]:
        return query(connection, _INTROSPECT_SQL, _map_row)

    def render_disable(self, snapshot: ForeignKeyConstraint) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"DROP CONSTRAINT {snapshot.constraint_name}"
        ]

    def render_enable(self, snapshot: ForeignKeyConstraint) -> list[str]:
        statement = (
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"ADD CONSTRAINT {snapshot.constraint_name} "
            f"FOREIGN KEY ({snapshot.columns}) "
            f"REFERENCES {snapshot.referenced_table_schema}.{snapshot.referenced_table_name} "
            f"({snapshot.referenced_columns}) "
            f"ON UPDATE {snapshot.update_rule} "
            f"ON DELETE {snapshot.delete_rule}"
        )
        if snapshot.deferrable:
            statement = f"{statement} {snapshot.deferrable}"
        return [statement]
