"""
Repository layer for Branch persistence.
All SQL for the `branches` table lives here.
"""
import sqlite3
import uuid
from typing import Optional
import logging

from backend.core.logging_config import log_db_timing
from backend.db.timestamps import next_timestamp, utc_now
from backend.models.branch import Branch

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"name", "description", "address", "phone", "email", "is_active"}


class BranchRepository:
    """Data access layer for branch records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing BranchRepository")
        self._conn = conn

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @log_db_timing
    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        logger.trace("Fetching branch id=%s", branch_id)
        row = self._conn.execute(
            "SELECT * FROM branches WHERE id = ?", (branch_id,)
        ).fetchone()
        return Branch.from_row(row) if row else None

    @log_db_timing
    def get_by_name(
        self, name: str, exclude_id: Optional[str] = None
    ) -> Optional[Branch]:
        """Case-insensitive lookup on `name`, active or not."""
        logger.trace("Fetching branch by name=%s exclude_id=%s", name, exclude_id)
        # SQLite's lower() only folds ASCII, so candidates are compared in Python too.
        rows = self._conn.execute(
            "SELECT * FROM branches WHERE id IS NOT ?", (exclude_id,)
        ).fetchall()
        wanted = name.casefold()
        for row in rows:
            if row["name"].casefold() == wanted:
                return Branch.from_row(row)
        return None

    @log_db_timing
    def list_all(self, active_only: bool = False) -> list[Branch]:
        """Return branches in insertion order."""
        logger.trace("Listing branches active_only=%s", active_only)
        if active_only:
            rows = self._conn.execute(
                "SELECT * FROM branches WHERE is_active = 1 ORDER BY rowid"
            ).fetchall()
        else:
            rows = self._conn.execute(
                "SELECT * FROM branches ORDER BY rowid"
            ).fetchall()
        return [Branch.from_row(r) for r in rows]

    @log_db_timing
    def count(self, active_only: bool = False) -> int:
        sql = "SELECT COUNT(*) FROM branches"
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
        description: Optional[str] = None,
        address: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
    ) -> Branch:
        logger.info("Creating branch record name=%s", name)
        branch_id = str(uuid.uuid4())
        now = utc_now().isoformat()
        self._conn.execute(
            """
            INSERT INTO branches (
                id, name, description, address, phone, email,
                is_active, created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, 1, ?, ?)
            """,
            (branch_id, name, description, address, phone, email, now, now),
        )
        return self.get_by_id(branch_id)  # type: ignore[return-value]

    @log_db_timing
    def update(self, branch_id: str, **fields) -> Optional[Branch]:
        """Overwrite the given columns and refresh `updated_at`."""
        current = self.get_by_id(branch_id)
        if current is None:
            return None

        unknown = set(fields) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update branch columns: {', '.join(sorted(unknown))}")

        logger.info("Updating branch record id=%s fields=%s", branch_id, sorted(fields))
        if "is_active" in fields:
            fields["is_active"] = int(fields["is_active"])
        fields["updated_at"] = next_timestamp(current.updated_at).isoformat()
        set_clause = ", ".join(f"{col} = ?" for col in fields)
        values = list(fields.values()) + [branch_id]
        self._conn.execute(
            f"UPDATE branches SET {set_clause} WHERE id = ?", values
        )
        return self.get_by_id(branch_id)

    @log_db_timing
    def delete(self, branch_id: str) -> bool:
        logger.info("Deleting branch record id=%s", branch_id)
        cursor = self._conn.execute(
            "DELETE FROM branches WHERE id = ?", (branch_id,)
        )
        logger.info("Branch delete affected %s rows", cursor.rowcount)
        return cursor.rowcount > 0
