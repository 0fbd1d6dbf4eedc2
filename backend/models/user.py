"""
Domain model (plain Python dataclass) representing a User row from the DB.
Only what the authorization gate needs: identity, role and activation.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"


@dataclass
class User:
    id: int
    email: str
    username: str
    hashed_password: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
    full_name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_row(cls, row) -> "User":
        """Build a User from a sqlite3.Row object."""
        logger.trace("Hydrating User from database row")
        return cls(
            id=row["id"],
            email=row["email"],
            username=row["username"],
            full_name=row["full_name"],
            hashed_password=row["hashed_password"],
            role=UserRole(row["role"]),
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
