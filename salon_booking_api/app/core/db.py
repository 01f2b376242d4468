"""
SQLite database integration and simple migration system.

The :class:`Database` object is created once at application start and
handed to the services through FastAPI dependencies.  It opens a new
connection per operation (``get_connection``/``get_cursor``) and offers
``transaction`` for multi‑statement writes that must not interleave
with other writers, such as "check the category is unused, then delete
it" or "write a service row and its audit entry".

Migrations are stored in-code and applied by ``init_db``; applied
versions are recorded in the ``migrations`` table.  Append new
migrations with an incremented version number.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .seed_data import DEFAULT_CATEGORIES, DEMO_SERVICES

logger = logging.getLogger(__name__)

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: catalog, categories and audit log
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS categories (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            -- NOCASE keeps 'Beauty' and 'beauty' from coexisting
            name TEXT NOT NULL UNIQUE COLLATE NOCASE
        );

        CREATE TABLE IF NOT EXISTS services (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            performer TEXT NOT NULL,
            duration INTEGER NOT NULL,
            price INTEGER NOT NULL,
            category TEXT,
            imageUrl TEXT,
            description TEXT
        );

        CREATE TABLE IF NOT EXISTS service_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT,
            action TEXT NOT NULL,
            service_id INTEGER,
            details TEXT,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: lookup indices for category checks and audit queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_services_category ON services(category COLLATE NOCASE);
        CREATE INDEX IF NOT EXISTS idx_service_logs_service_id ON service_logs(service_id);
        CREATE INDEX IF NOT EXISTS idx_service_logs_timestamp ON service_logs(timestamp);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Strips an optional ``sqlite:///`` prefix.  Absolute paths are used
    as is, relative ones are resolved against the project root.
    """
    path = database_url
    if path.startswith("sqlite:///"):
        path = path[len("sqlite:///"):]
    if os.path.isabs(path):
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / path).resolve())


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value

class Database:
    """Connection factory and schema manager for the SQLite store."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be
        accessed by name.  ``casefold()`` is available in SQL; unlike
        the built‑in ``lower()`` it also folds non‑ASCII letters.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside an immediate (write‑locked) transaction.

        The write lock is taken before the first read, so reads made
        inside the block cannot go stale before the writes commit.
        Any exception rolls the whole block back.
        """
        conn = self.get_connection()
        conn.isolation_level = None
        cursor = conn.cursor()
        try:
            cursor.execute("BEGIN IMMEDIATE")
            try:
                yield cursor
            except BaseException:
                cursor.execute("ROLLBACK")
                raise
            cursor.execute("COMMIT")
        finally:
            conn.close()

    def init_db(self, seed_demo_services: bool = False) -> None:
        """Create the database, apply pending migrations and seed defaults.

        Default categories are inserted when the ``categories`` table is
        empty.  With ``seed_demo_services`` the demo catalog is inserted
        when the ``services`` table is empty.
        """
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        with self.get_cursor() as cursor:
            cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied database migration %s", version)
                    current_version = version

            count = cursor.execute("SELECT COUNT(*) AS count FROM categories").fetchone()["count"]
            if count == 0:
                logger.info("No categories found, seeding default categories")
                cursor.executemany(
                    "INSERT OR IGNORE INTO categories (name) VALUES (?)",
                    [(name,) for name in DEFAULT_CATEGORIES],
                )

            if seed_demo_services:
                count = cursor.execute("SELECT COUNT(*) AS count FROM services").fetchone()["count"]
                if count == 0:
                    logger.info("No services found, seeding %d demo services", len(DEMO_SERVICES))
                    for service in DEMO_SERVICES:
                        cursor.execute(
                            "INSERT OR IGNORE INTO categories (name) VALUES (?)",
                            (service["category"],),
                        )
                        cursor.execute(
                            "INSERT INTO services (name, performer, duration, price, category) "
                            "VALUES (?, ?, ?, ?, ?)",
                            (
                                service["name"],
                                service["performer"],
                                service["duration"],
                                service["price"],
                                service["category"],
                            ),
                        )
