"""SQL execution helper.

Runs metadata queries and DDL batches on a caller-supplied DB-API
connection. The connection is never retained nor closed here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from ref_guard.core.exceptions import ExecutionFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

RowMapper = Callable[[dict[str, Any]], T]


def _rows_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Convert cursor results to list of dicts keyed by lower-cased column label.

    Handles both tuple-like rows and dict-like rows from different drivers.
    Catalog views disagree on label case (Oracle upper-cases aliases), so
    keys are normalized.
    """
    if cursor.description is None:
        return []
    columns = [desc[0].lower() for desc in cursor.description]
    rows = cursor.fetchall()
    if not rows:
        return []

    # Check if rows are already dict-like (e.g., psycopg dict_row, MySQL dict cursor)
    if isinstance(rows[0], dict):
        return [{key.lower(): value for key, value in row.items()} for row in rows]

    return [dict(zip(columns, row, strict=True)) for row in rows]


def query(connection: Any, sql: str, row_mapper: RowMapper[T]) -> list[T]:
    """Execute ``sql`` and map every returned row.

    Args:
        connection: DB-API connection.
        sql: Query text.
        row_mapper: Called with each row as a dict (lower-cased keys).

    Returns:
        Mapped values in result-set order.

    Raises:
        ExecutionFailure: If the query or the mapper fails. No partial
            result is returned.
    """
    logger.debug("Executing query: %s", sql)
    cursor = connection.cursor()
    try:
        cursor.execute(sql)
        rows = _rows_to_dicts(cursor)
        logger.debug("Extracting %d query result(s)", len(rows))
        return [row_mapper(row) for row in rows]
    except Exception as e:
        raise ExecutionFailure([sql], e) from e
    finally:
        cursor.close()


def batch_execute(connection: Any, statements: Sequence[str]) -> None:
    """Execute ``statements`` in order as one batch, then commit.

    Work left pending on the connection is committed first.
    Stops at the first failing statement: later statements are not sent.
    On failure the connection is rolled back (a no-op for engines where DDL
    auto-commits) and ``ExecutionFailure`` lists the whole batch.
    """
    statements = list(statements)
    if not statements:
        logger.debug("Empty batch, nothing to execute")
        return

    logger.debug("Executing batch queries: %s", statements)
    cursor = connection.cursor()
    try:
        if getattr(connection, "in_transaction", False):
            # Session pragmas (SQLite foreign_keys) are ignored inside a transaction.
            logger.debug("Committing pending transaction before batch")
            connection.commit()
        for statement in statements:
            logger.debug("Executing batch query `%s`", statement)
            cursor.execute(statement)
        connection.commit()
    except Exception as e:
        _rollback(connection)
        raise ExecutionFailure(statements, e) from e
    finally:
        cursor.close()


def _rollback(connection: Any) -> None:
    try:
        connection.rollback()
    except Exception:
        # The batch failure is the error worth reporting.
        logger.warning("Rollback after failed batch also failed", exc_info=True)
