"""
Branch registry.
Branch names are unique regardless of case, across active and inactive records.
"""
import sqlite3
from typing import Optional
import logging

from backend.core.exceptions import ConflictError, NotFoundError
from backend.models.branch import Branch
from backend.repositories.branch_repository import BranchRepository
from backend.schemas.branch import BranchCreate, BranchUpdate

logger = logging.getLogger(__name__)

_MERGEABLE_FIELDS = ("name", "description", "address", "phone", "email")


class BranchService:
    """Lifecycle and validation rules for branch records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing BranchService")
        self._repo = BranchRepository(conn)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_active(self) -> list[Branch]:
        logger.info("Listing active branches")
        return self._repo.list_all(active_only=True)

    def list_all(self) -> list[Branch]:
        logger.info("Listing all branches")
        return self._repo.list_all()

    def get_branch(self, branch_id: str) -> Branch:
        logger.info("Fetching branch id=%s", branch_id)
        branch = self._repo.get_by_id(branch_id)
        if not branch:
            logger.warning("Branch id=%s not found", branch_id)
            raise NotFoundError("Branch", branch_id)
        return branch

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_branch(self, data: BranchCreate) -> Branch:
        logger.info("Creating branch %s", data.name)
        self._ensure_name_available(data.name)

        try:
            branch = self._repo.create(
                name=data.name,
                description=data.description,
                address=data.address,
                phone=data.phone,
                email=data.email,
            )
        except sqlite3.IntegrityError:
            logger.warning("Store rejected duplicate branch name: %s", data.name)
            raise self._name_conflict()
        logger.info("Branch created id=%s", branch.id)
        return branch

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_branch(self, branch_id: str, data: BranchUpdate) -> Branch:
        """Merge the supplied fields; omitted ones keep their current value."""
        logger.info("Updating branch id=%s", branch_id)
        self.get_branch(branch_id)

        fields = {
            field: getattr(data, field)
            for field in _MERGEABLE_FIELDS
            if field in data.model_fields_set
        }
        if "name" in fields:
            self._ensure_name_available(fields["name"], exclude_id=branch_id)

        try:
            updated = self._repo.update(branch_id, **fields)
        except sqlite3.IntegrityError:
            logger.warning("Store rejected duplicate branch name: %s", data.name)
            raise self._name_conflict()
        logger.info("Branch updated id=%s fields=%s", branch_id, sorted(fields))
        return updated  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Delete / status
    # ------------------------------------------------------------------

    def delete_branch(self, branch_id: str) -> None:
        logger.info("Deleting branch id=%s", branch_id)
        if not self._repo.delete(branch_id):
            logger.warning("Branch id=%s not found for deletion", branch_id)
            raise NotFoundError("Branch", branch_id)
        logger.info("Branch deleted id=%s", branch_id)

    def toggle_status(self, branch_id: str) -> Branch:
        branch = self.get_branch(branch_id)
        logger.info("Toggling branch id=%s is_active=%s", branch_id, branch.is_active)
        return self._repo.update(branch_id, is_active=not branch.is_active)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_name_available(self, name: str, exclude_id: Optional[str] = None) -> None:
        if self._repo.get_by_name(name, exclude_id=exclude_id):
            logger.warning("Duplicate branch name: %s", name)
            raise self._name_conflict()

    @staticmethod
    def _name_conflict() -> ConflictError:
        return ConflictError("Branch name already exists")
