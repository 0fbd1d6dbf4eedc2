"""
Domain model representing a Branch row from the DB.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
import logging

logger = logging.getLogger(__name__)


@dataclass
class Branch:
    id: str
    name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "Branch":
        """Build a Branch from a sqlite3.Row object."""
        logger.trace("Hydrating Branch from database row")
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            address=row["address"],
            phone=row["phone"],
            email=row["email"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
