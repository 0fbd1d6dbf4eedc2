"""
SQL DDL statements for all application tables.

Uniqueness rules of the registries are also declared here as UNIQUE
constraints so that a concurrent writer slipping past the service-level
check is still rejected by the store.
"""
import sqlite3

# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    email             TEXT    NOT NULL UNIQUE,
    username          TEXT    NOT NULL UNIQUE,
    full_name         TEXT,
    hashed_password   TEXT    NOT NULL,
    role              TEXT    NOT NULL DEFAULT 'employee'
                              CHECK(role IN ('admin', 'employee')),
    is_active         INTEGER NOT NULL DEFAULT 1,
    created_at        TEXT    NOT NULL DEFAULT (datetime('now')),
    updated_at        TEXT    NOT NULL DEFAULT (datetime('now'))
);
"""

# rowid keeps insertion order for listings; ids are UUID strings.
CREATE_CATEGORIES_TABLE = """
CREATE TABLE IF NOT EXISTS categories (
    id          TEXT    PRIMARY KEY,
    name        TEXT    NOT NULL CHECK(length(name) BETWEEN 1 AND 100),
    value       TEXT    NOT NULL UNIQUE,
    label       TEXT    NOT NULL,
    description TEXT,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL
);
"""

CREATE_BRANCHES_TABLE = """
CREATE TABLE IF NOT EXISTS branches (
    id          TEXT    PRIMARY KEY,
    name        TEXT    NOT NULL COLLATE NOCASE UNIQUE
                        CHECK(length(name) BETWEEN 1 AND 100),
    description TEXT,
    address     TEXT,
    phone       TEXT,
    email       TEXT,
    is_active   INTEGER NOT NULL DEFAULT 1,
    created_at  TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL
);
"""

ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_CATEGORIES_TABLE,
    CREATE_BRANCHES_TABLE,
]


def create_tables(conn: sqlite3.Connection) -> None:
    """Create all tables (IF NOT EXISTS, safe on every restart)."""
    cursor = conn.cursor()
    for ddl in ALL_TABLES:
        cursor.execute(ddl)
    conn.commit()
