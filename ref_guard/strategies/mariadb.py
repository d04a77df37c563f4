"""MariaDB strategy - same catalog and DDL as MySQL."""

from __future__ import annotations

from ref_guard.strategies.mysql import MysqlStrategy


class MariadbStrategy(MysqlStrategy):
    """Foreign key strategy for MariaDB."""
