"""
Business logic for service categories.

Category names are normalised before they are written: surrounding
whitespace is trimmed, runs of inner whitespace collapse to a single
space and every word is title‑cased (``"  hair   TREATMENT"`` becomes
``"Hair Treatment"``).  The ``categories.name`` column is unique and
case‑insensitive, so inserting the same name twice leaves one row.
"""

import logging
import sqlite3
from typing import List

from ..core.db import Database
from ..core.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)


def normalize_category_name(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())


class CategoryService:
    """Reads, adds and deletes categories."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def ensure_category(cursor: sqlite3.Cursor, name: str) -> None:
        """Insert an already normalised category name unless it exists."""
        cursor.execute("INSERT OR IGNORE INTO categories (name) VALUES (?)", (name,))

    async def list_categories(self) -> List[str]:
        with self.db.get_cursor() as cursor:
            rows = cursor.execute("SELECT name FROM categories ORDER BY name").fetchall()
        return [row["name"] for row in rows]

    async def add_category(self, name: str) -> str:
        """Normalise ``name``, insert it if absent and return the stored form."""
        normalized = normalize_category_name(name)
        if not normalized:
            raise ValidationFailed("Category name is required.")
        with self.db.get_cursor() as cursor:
            self.ensure_category(cursor, normalized)
            created = cursor.rowcount > 0
        if created:
            logger.info("Added category '%s'", normalized)
        return normalized

    async def delete_category(self, name: str) -> str:
        """Delete a category that no service references.

        The usage check and the delete run in one transaction.  Raises
        ``Conflict`` while any service uses the category (compared
        case‑insensitively) and ``NotFound`` if there is no such
        category.
        """
        normalized = normalize_category_name(name)
        if not normalized:
            raise ValidationFailed("Category name is required.")
        with self.db.transaction() as cursor:
            in_use = cursor.execute(
                "SELECT COUNT(*) AS count FROM services WHERE category = ? COLLATE NOCASE",
                (normalized,),
            ).fetchone()["count"]
            if in_use:
                raise Conflict(
                    f"Cannot delete category '{normalized}': it is in use by {in_use} service(s)."
                )
            cursor.execute("DELETE FROM categories WHERE name = ?", (normalized,))
            if cursor.rowcount == 0:
                raise NotFound(f"Category '{normalized}' not found.")
        logger.info("Deleted category '%s'", normalized)
        return normalized
