"""MySQL strategy - drop and re-create foreign keys.

MySQL cannot disable a single foreign key, so each constraint is dropped
and later re-created from ``information_schema``. MariaDB shares the same
catalog and DDL (see ``ref_guard.strategies.mariadb``).
"""

from __future__ import annotations

from typing import Any

from ref_guard.core.execution import query
from ref_guard.strategies.snapshot import ForeignKeyConstraint

# Identifiers are backtick-quoted by the catalog query itself, column lists
# included, so rendered DDL re-uses them untouched.
_INTROSPECT_SQL = """
SELECT
  KCU.CONSTRAINT_SCHEMA AS constraint_schema,
  CONCAT('`', REPLACE(KCU.CONSTRAINT_NAME, '`', '``'), '`') AS constraint_name,
  CONCAT('`', REPLACE(KCU.TABLE_SCHEMA, '`', '``'), '`') AS table_schema,
  CONCAT('`', REPLACE(KCU.TABLE_NAME, '`', '``'), '`') AS table_name,
  CONCAT('`', REPLACE(KCU.REFERENCED_TABLE_SCHEMA, '`', '``'), '`') AS referenced_table_schema,
  CONCAT('`', REPLACE(KCU.REFERENCED_TABLE_NAME, '`', '``'), '`') AS referenced_table_name,
  RC.UPDATE_RULE AS update_rule,
  RC.DELETE_RULE AS delete_rule,
  GROUP_CONCAT(
    CONCAT('`', REPLACE(KCU.COLUMN_NAME, '`', '``'), '`')
    ORDER BY KCU.ORDINAL_POSITION SEPARATOR ', '
  ) AS table_columns,
  GROUP_CONCAT(
    CONCAT('`', REPLACE(KCU.REFERENCED_COLUMN_NAME, '`', '``'), '`')
    ORDER BY KCU.ORDINAL_POSITION SEPARATOR ', '
  ) AS referenced_table_columns
FROM information_schema.KEY_COLUMN_USAGE KCU
INNER JOIN information_schema.REFERENTIAL_CONSTRAINTS RC
  ON RC.CONSTRAINT_SCHEMA = KCU.CONSTRAINT_SCHEMA
  AND RC.CONSTRAINT_NAME = KCU.CONSTRAINT_NAME
  AND RC.TABLE_NAME = KCU.TABLE_NAME
GROUP BY
  KCU.CONSTRAINT_SCHEMA,
  KCU.CONSTRAINT_NAME,
  KCU.TABLE_SCHEMA,
  KCU.TABLE_NAME,
  KCU.REFERENCED_TABLE_SCHEMA,
  KCU.REFERENCED_TABLE_NAME,
  RC.UPDATE_RULE,
  RC.DELETE_RULE
ORDER BY KCU.CONSTRAINT_SCHEMA, KCU.TABLE_NAME, KCU.CONSTRAINT_NAME
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
        referenced_columns=row["referenced_table_columns"],
        update_rule=row["update_rule"],
        delete_rule=row["delete_rule"],
    )


class MysqlStrategy:
    """Foreign key strategy for MySQL."""

    def introspect(self, connection: Any) -> list[ForeignKeyConstraint]:
        return query(connection, _INTROSPECT_SQL, _map_row)

    def render_disable(self, snapshot: ForeignKeyConstraint) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"DROP FOREIGN KEY {snapshot.constraint_name}"
        ]

    def render_enable(self, snapshot: ForeignKeyConstraint) -> list[str]:
        return [
            f"ALTER TABLE {snapshot.table_schema}.{snapshot.table_name} "
            f"ADD CONSTRAINT {snapshot.constraint_name} "
            f"FOREIGN KEY ({snapshot.columns}) "
            f"REFERENCES {snapshot.referenced_table_schema}.{snapshot.referenced_table_name} "
            f"({snapshot.referenced_columns}) "
            f"ON UPDATE {snapshot.update_rule} "
            f"ON DELETE {snapshot.delete_rule}"
        ]
