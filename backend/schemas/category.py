"""
Pydantic schemas for Category request/response validation.
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from backend.schemas.common import CamelModel, blank_to_none, reject_null

CATEGORY_VALUE_PATTERN = re.compile(r"^[a-z0-9-]+$")


def _check_value(value: Optional[str]) -> str:
    value = reject_null(value)
    if not CATEGORY_VALUE_PATTERN.fullmatch(value):
        raise ValueError(
            "Category value must contain only lowercase letters, numbers, and hyphens"
        )
    return value


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class CategoryCreate(BaseModel):
    """Payload for creating categories."""

    name: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("description", mode="before")
    @classmethod
    def empty_description_is_absent(cls, v):
        return blank_to_none(v)

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: str) -> str:
        return _check_value(v)


class CategoryUpdate(BaseModel):
    """
    Payload for updating categories. Every field may be omitted; only the
    fields present in ``model_fields_set`` are applied. An explicit empty or
    null ``description`` clears it.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    value: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("description", mode="before")
    @classmethod
    def empty_description_is_absent(cls, v):
        return blank_to_none(v)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        return reject_null(v)

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: Optional[str]) -> str:
        return _check_value(v)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class CategoryResponse(CamelModel):
    """Response model for category data."""

    id: str
    name: str
    value: str
    label: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    total: int
    message: str


class CategoryDetailResponse(BaseModel):
    category: CategoryResponse
    message: str
