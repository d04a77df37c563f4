"""
Example 02: Inspecting the DDL a strategy renders

Useful to review what will run against a shared database before wiring a
manager into a test suite.
"""

from ref_guard.strategies.mssql import MssqlForeignKey, MssqlStrategy
from ref_guard.strategies.postgresql import PostgresForeignKey, PostgresqlStrategy


def main():
    pg = PostgresqlStrategy()
    fk = PostgresForeignKey(
        nspname="public",
        relname="orders",
        conname="fk_orders_users",
        constraintdef="FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE DEFERRABLE",
    )
    print("PostgreSQL drop:    ", pg.render_disable(fk))
    print("PostgreSQL restore: ", pg.render_enable(fk))

    mssql = MssqlStrategy()
    toggle = MssqlForeignKey("[fk_orders_users]", "[dbo]", "[orders]")
    print("SQL Server disable: ", mssql.render_disable(toggle))
    print("SQL Server enable:  ", mssql.render_enable(toggle))


if __name__ == "__main__":
    main()
