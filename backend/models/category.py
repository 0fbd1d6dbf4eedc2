"""
Domain model representing a Category row from the DB.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class Category:
    id: str
    name: str
    value: str
    label: str
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row) -> "Category":
        """Build a Category from a sqlite3.Row object."""
        logger.trace("Hydrating Category from database row")
        return cls(
            id=row["id"],
            name=row["name"],
            value=row["value"],
            label=row["label"],
            description=row["description"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
