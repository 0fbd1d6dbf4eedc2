"""
Pydantic schemas for the authenticated caller's profile.
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from backend.models.user import UserRole


class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    full_name: Optional[str]
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
