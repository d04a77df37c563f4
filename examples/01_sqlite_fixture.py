"""
Example 01: Loading a fixture with foreign keys suspended

Children are inserted before their parents exist, which SQLite rejects
while foreign key enforcement is on.
"""

import logging
import sqlite3

from ref_guard import ForeignKeyConfig, build, create_managers


def load_fixture(conn):
    conn.execute("INSERT INTO orders (id, user_id) VALUES (1, 1)")
    conn.execute("INSERT INTO orders (id, user_id) VALUES (2, 2)")
    conn.execute("INSERT INTO users (id, name) VALUES (1, 'Alice')")
    conn.execute("INSERT INTO users (id, name) VALUES (2, 'Bob')")
    conn.commit()


def main():
    logging.basicConfig(level=logging.DEBUG)

    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
    conn.execute(
        "CREATE TABLE orders (id INTEGER PRIMARY KEY, user_id INTEGER NOT NULL, "
        "FOREIGN KEY (user_id) REFERENCES users(id))"
    )
    conn.commit()

    # "auto" picks the vendor from the connection (sqlite3 here)
    config = ForeignKeyConfig(managers=["auto"])
    operation = build(load_fixture, create_managers(config))
    operation(conn)

    print("Orders:", conn.execute("SELECT id, user_id FROM orders").fetchall())
    print("Foreign keys enforced:", conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1)
    conn.close()


if __name__ == "__main__":
    main()
