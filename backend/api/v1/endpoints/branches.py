"""
Branch settings endpoints:
  GET    /branches                        – Active branches (authenticated)
  GET    /branches/all                    – All branches incl. inactive (admin)
  GET    /branches/{id}                   – A single branch (authenticated)
  POST   /branches                        – Create a branch (admin)
  PUT    /branches/{id}                   – Partially update a branch (admin)
  DELETE /branches/{id}                   – Delete a branch (admin)
  PATCH  /branches/{id}/toggle-status     – Activate / deactivate (admin)
"""
from fastapi import APIRouter, Depends, status
import logging

from backend.core.dependencies import db_dependency, get_current_active_user, require_admin
from backend.models.user import User
from backend.schemas.branch import (
    BranchCreate,
    BranchDetailResponse,
    BranchListResponse,
    BranchUpdate,
)
from backend.schemas.common import MessageResponse
from backend.services.branch_service import BranchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/branches", tags=["Branches"])


@router.get(
    "",
    response_model=BranchListResponse,
    summary="List active branches",
)
def list_active_branches(
    conn=Depends(db_dependency),
    _: User = Depends(get_current_active_user),
):
    branches = BranchService(conn).list_active()
    return {
        "branches": branches,
        "total": len(branches),
        "message": "Branches retrieved successfully",
    }


@router.get(
    "/all",
    response_model=BranchListResponse,
    summary="List all branches, including inactive ones",
)
def list_all_branches(
    conn=Depends(db_dependency),
    _: User = Depends(require_admin),
):
    branches = BranchService(conn).list_all()
    return {
        "branches": branches,
        "total": len(branches),
        "message": "Branches retrieved successfully",
    }


@router.get(
    "/{branch_id}",
    response_model=BranchDetailResponse,
    summary="Get a specific branch",
)
def get_branch(
    branch_id: str,
    conn=Depends(db_dependency),
    _: User = Depends(get_current_active_user),
):
    branch = BranchService(conn).get_branch(branch_id)
    return {"branch": branch, "message": "Branch retrieved successfully"}


@router.post(
    "",
    response_model=BranchDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new branch",
)
def create_branch(
    data: BranchCreate,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    """Create a branch. Names are unique regardless of case."""
    logger.info("User id=%s creating branch %s", current_user.id, data.name)
    branch = BranchService(conn).create_branch(data)
    return {"branch": branch, "message": "Branch created successfully"}


@router.put(
    "/{branch_id}",
    response_model=BranchDetailResponse,
    summary="Update a branch",
)
def update_branch(
    branch_id: str,
    data: BranchUpdate,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    """Only fields present in the body are changed."""
    logger.info("User id=%s updating branch id=%s", current_user.id, branch_id)
    branch = BranchService(conn).update_branch(branch_id, data)
    return {"branch": branch, "message": "Branch updated successfully"}


@router.delete(
    "/{branch_id}",
    response_model=MessageResponse,
    summary="Delete a branch",
)
def delete_branch(
    branch_id: str,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    logger.info("User id=%s deleting branch id=%s", current_user.id, branch_id)
    BranchService(conn).delete_branch(branch_id)
    return {"message": "Branch deleted successfully"}


@router.patch(
    "/{branch_id}/toggle-status",
    response_model=BranchDetailResponse,
    summary="Activate or deactivate a branch",
)
def toggle_branch_status(
    branch_id: str,
    conn=Depends(db_dependency),
    current_user: User = Depends(require_admin),
):
    logger.info("User id=%s toggling branch id=%s", current_user.id, branch_id)
    branch = BranchService(conn).toggle_status(branch_id)
    state = "activated" if branch.is_active else "deactivated"
    return {"branch": branch, "message": f"Branch {state} successfully"}
