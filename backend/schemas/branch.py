"""
Pydantic schemas for Branch request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from backend.schemas.common import CamelModel, blank_to_none, reject_null

_OPTIONAL_TEXT_FIELDS = ("description", "address", "phone", "email")


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class BranchCreate(BaseModel):
    """Payload for creating branches."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_is_absent(cls, v):
        return blank_to_none(v)


class BranchUpdate(BaseModel):
    """
    Payload for updating branches. Omitted fields are left alone; optional
    fields sent as "" or null are cleared.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    address: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None

    @field_validator(*_OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def empty_is_absent(cls, v):
        return blank_to_none(v)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        return reject_null(v)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class BranchResponse(CamelModel):
    """Response model for branch data."""

    id: str
    name: str
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class BranchListResponse(BaseModel):
    branches: list[BranchResponse]
    total: int
    message: str


class BranchDetailResponse(BaseModel):
    branch: BranchResponse
    message: str
