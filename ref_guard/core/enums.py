"""Database vendor enumeration."""

from __future__ import annotations

from enum import Enum


class Vendor(Enum):
    """Supported database engines, valued by their JDBC id."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    ORACLE = "oracle"
    MSSQL = "sqlserver"
    MARIADB = "mariadb"
    HSQLDB = "hsqldb"
    H2 = "h2"
    SQLITE = "sqlite"
