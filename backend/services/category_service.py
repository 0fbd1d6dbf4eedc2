"""
Category registry.
Reads are open to any authenticated user; the endpoints restrict writes to
administrators. Category `value` is unique across active and inactive records.
"""
import sqlite3
from typing import Optional
import logging

from backend.core.exceptions import ConflictError, NotFoundError
from backend.models.category import Category
from backend.repositories.category_repository import CategoryRepository
from backend.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """Lifecycle and validation rules for category records."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        logger.trace("Initializing CategoryService")
        self._repo = CategoryRepository(conn)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_active(self) -> list[Category]:
        logger.info("Listing active categories")
        return self._repo.list_all(active_only=True)

    def list_all(self) -> list[Category]:
        logger.info("Listing all categories")
        return self._repo.list_all()

    def get_category(self, category_id: str) -> Category:
        logger.info("Fetching category id=%s", category_id)
        category = self._repo.get_by_id(category_id)
        if not category:
            logger.warning("Category id=%s not found", category_id)
            raise NotFoundError("Category", category_id)
        return category

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_category(self, data: CategoryCreate) -> Category:
        logger.info("Creating category value=%s", data.value)
        self._ensure_value_available(data.value)

        try:
            category = self._repo.create(
                name=data.name,
                value=data.value,
                description=data.description,
            )
        except sqlite3.IntegrityError:
            # Lost a race against a concurrent insert of the same value.
            logger.warning("Store rejected duplicate category value: %s", data.value)
            raise self._value_conflict()
        logger.info("Category created id=%s", category.id)
        return category

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """
        Apply only the fields the caller supplied. A new `name` is mirrored
        into `label`; a supplied `description` (even empty) overwrites the old
        one. `updated_at` is refreshed even when nothing else changes.
        """
        logger.info("Updating category id=%s", category_id)
        self.get_category(category_id)

        supplied = data.model_fields_set
        fields: dict = {}
        if "name" in supplied:
            fields["name"] = data.name
            fields["label"] = data.name
        if "value" in supplied:
            self._ensure_value_available(data.value, exclude_id=category_id)  # type: ignore[arg-type]
            fields["value"] = data.value
        if "description" in supplied:
            fields["description"] = data.description

        try:
            updated = self._repo.update(category_id, **fields)
        except sqlite3.IntegrityError:
            logger.warning("Store rejected duplicate category value: %s", data.value)
            raise self._value_conflict()
        logger.info("Category updated id=%s fields=%s", category_id, sorted(fields))
        return updated  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Delete / status
    # ------------------------------------------------------------------

    def delete_category(self, category_id: str) -> None:
        logger.info("Deleting category id=%s", category_id)
        if not self._repo.delete(category_id):
            logger.warning("Category id=%s not found for deletion", category_id)
            raise NotFoundError("Category", category_id)
        logger.info("Category deleted id=%s", category_id)

    def toggle_status(self, category_id: str) -> Category:
        category = self.get_category(category_id)
        logger.info(
            "Toggling category id=%s is_active=%s -> %s",
            category_id,
            category.is_active,
            not category.is_active,
        )
        return self._repo.update(category_id, is_active=not category.is_active)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_value_available(self, value: str, exclude_id: Optional[str] = None) -> None:
        if self._repo.get_by_value(value, exclude_id=exclude_id):
            logger.warning("Duplicate category value: %s", value)
            raise self._value_conflict()

    @staticmethod
    def _value_conflict() -> ConflictError:
        return ConflictError("Category value already exists")
