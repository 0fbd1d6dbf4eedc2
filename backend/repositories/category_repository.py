"""
Repository layer for Category persistence.
All SQL for the `categories` table lives here.
"""
import sqlite3
import uuid
from typing import Optional
import logging

from backend.core.logging_config import log_db_timing
from backend.db.timestamps import next_timestamp, utc_now
from backend.models.category import Category

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"name", "value", "label", "description", "is_active"}


class CategoryRepository:
    """Data access layer for category records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing CategoryRepository")
        self._conn = conn

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, category_id: str) -> Optional[Category]:
        logger.trace("Fetching category id=%s", category_id)
        row = self._conn.execute(
            "SELECT * FROM categories WHERE id = ?", (category_id,)
        ).fetchone()
        return Category.from_row(row) if row else None

    @log_db_timing
    def get_by_value(
        self, value: str, exclude_id: Optional[str] = None
    ) -> Optional[Category]:
        """Exact (case-sensitive) lookup on `value`, active or not."""
        logger.trace("Fetching category by value=%s exclude_id=%s", value, exclude_id)
        row = self._conn.execute(
            "SELECT * FROM categories WHERE value = ? AND id IS NOT ?",
            (value, exclude_id),
        ).fetchone()
        return Category.from_row(row) if row else None

    @log_db_timing
    def list_all(self, active_only: bool = False) -> list[Category]:
        """Return categories in insertion order."""
        logger.trace("Listing categories active_only=%s", active_only)
        if active_only:
            rows = self._conn.execute(
                "SELECT * FROM categories WHERE is_active = 1 ORDER BY rowid"
            ).fetchall()
        else:
            rows = self._conn.execute(
                "SELECT * FROM categories ORDER BY rowid"
            ).fetchall()
        return [Category.from_row(r) for r in rows]

    @log_db_timing
    def count(self, active_only: bool = False) -> int:
        sql = "SELECT COUNT(*) FROM categories"
        if active_only:
            sql += " WHERE is_active = 1"
        return self._conn.execute(sql).fetchone()[0]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @log_db_timing
    def create(
        self,
        name: str,
        value: str,
        description: Optional[str] = None,
    ) -> Category:
        """Insert a new active category; `label` mirrors `name`."""
        logger.info("Creating category record value=%s", value)
        category_id = str(uuid.uuid4())
        now = utc_now().isoformat()
        self._conn.execute(
            """
            INSERT INTO categories (id, name, value, label, description, is_active, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, 1, ?, ?)
            """,
            (category_id, name, value, name, description, now, now),
        )
        return self.get_by_id(category_id)  # type: ignore[return-value]

    @log_db_timing
    def update(self, category_id: str, **fields) -> Optional[Category]:
        """
        Overwrite the given columns and refresh `updated_at`.
        An empty *fields* still bumps `updated_at`.
        """
        current = self.get_by_id(category_id)
        if current is None:
            return None

        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update category columns: {', '.join(sorted(unknown))}")

        logger.info("Updating category record id=%s fields=%s", category_id, sorted(fields))
        if "is_active" in fields:
            fields["is_active"] = int(fields["is_active"])
        fields["updated_at"] = next_timestamp(current.updated_at).isoformat()
        set_clause = ", ".join(f"{col} = ?" for col in fields)
        values = list(fields.values()) + [category_id]
        self._conn.execute(
            f"UPDATE categories SET {set_clause} WHERE id = ?", values
        )
        return self.get_by_id(category_id)

    @log_db_timing
    def delete(self, category_id: str) -> bool:
        logger.info("Deleting category record id=%s", category_id)
        cursor = self._conn.execute(
            "DELETE FROM categories WHERE id = ?", (category_id,)
        )
        logger.info("Category delete affected %s rows", cursor.rowcount)
        return cursor.rowcount > 0
