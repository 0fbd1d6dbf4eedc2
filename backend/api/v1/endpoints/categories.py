"""
Category settings endpoints:
  GET    /categories                        – Active categories (authenticated)
  GET    /categories/all                    – All categories incl. inactive (admin)
  GET    /categories/{id}                   – A single category (authenticated)
  POST   /categories                        – Create a category (admin)
  PUT    /categories/{id}                   – Partially update a category (admin)
  DELETE /categories/{id}                   – Delete a category (admin)
  PATCH  /categories/{id}/toggle-status     – Activate / deactivate (admin)
"""
from fastapi import APIRouter, Depends, status
import logging

from backend.core.dependencies import db_dependency, get_current_active_user, require_admin
from backend.models.user import User
from backend.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryUpdate,
)
from backend.schemas.common import MessageResponse
from backend.services.category_service import CategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List active categories",
)
def list_active_categories(
    conn=Depends(db_dependency),
    _: User = Depends(get_current_active_user),
):
    """Return active categories in creation order, with their count."""
    categories = CategoryService(conn).list_active()
    return {
        "categories": categories,
        "total": len(categories),
        "message": "Categories retrieved successfully",
    }


@router.get(
    "/all",
    response_model=CategoryListResponse,
    summary="List all categories, including inactive ones",
)
def list_all_categories(
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    categories = CategoryService(conn).list_all()
    return {
        "categories": categories,
        "total": len(categories),
        "message": "Categories retrieved successfully",
    }


@router.get(
    "/{category_id}",
    response_model=CategoryDetailResponse,
    summary="Get a specific category",
)
def get_category(
    category_id: str,
    conn=Depends(db_dependency),
    _: User = Depends(get_current_active_user),
):
    """Inactive categories are still addressable by id."""
    category = CategoryService(conn).get_category(category_id)
    return {"category": category, "message": "Category retrieved successfully"}


@router.post(
    "",
    response_model=CategoryDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new category",
)
def create_category(
    data: CategoryCreate,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    """
    Create a category. `value` must be lowercase letters, digits and hyphens
    and unique across all categories; `label` is set from `name`.
    """
    logger.info("User id=%s creating category value=%s", current_user.id, data.value)
    category = CategoryService(conn).create_category(data)
    return {"category": category, "message": "Category created successfully"}


@router.put(
    "/{category_id}",
    response_model=CategoryDetailResponse,
    summary="Update a category",
)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    """
    Only fields present in the body are changed. Sending `description` as an
    empty string or null clears it.
    """
    logger.info("User id=%s updating category id=%s", current_user.id, category_id)
    category = CategoryService(conn).update_category(category_id, data)
    return {"category": category, "message": "Category updated successfully"}


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    summary="Delete a category",
)
def delete_category(
    category_id: str,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    logger.info("User id=%s deleting category id=%s", current_user.id, category_id)
    CategoryService(conn).delete_category(category_id)
    return {"message": "Category deleted successfully"}


@router.patch(
    "/{category_id}/toggle-status",
    response_model=CategoryDetailResponse,
    summary="Activate or deactivate a category",
)
def toggle_category_status(
    category_id: str,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    logger.info("User id=%s toggling category id=%s", current_user.id, category_id)
    category = CategoryService(conn).toggle_status(category_id)
    state = "activated" if category.is_active else "deactivated"
    return {"category": category, "message": f"Category {state} successfully"}
