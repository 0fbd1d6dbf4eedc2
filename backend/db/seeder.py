"""
Database seeder: default admin account plus the reference categories and
branches the settings screens start with.

⚠️  FOR DEVELOPMENT ONLY.
    Disable with SEED_ADMIN=false / SEED_DEFAULT_SETTINGS=false.

Default credentials:
    username : admin
    password : Admin1234!
    email    : admin@settings.local
"""
import logging

from backend.core.security import hash_password
from backend.db.database import get_db
from backend.models.user import UserRole
from backend.repositories.branch_repository import BranchRepository
from backend.repositories.category_repository import CategoryRepository
from backend.repositories.user_repository import UserRepository
from backend.schemas.branch import BranchCreate
from backend.schemas.category import CategoryCreate
from backend.schemas.common import parse_payload
from backend.services.branch_service import BranchService
from backend.services.category_service import CategoryService

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------
ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@settings.local"
ADMIN_PASSWORD = "Admin1234!"
ADMIN_FULL_NAME = "Default Admin"

DEFAULT_CATEGORIES = [
    {
        "name": "Frozen Products",
        "value": "frozen-products",
        "description": "Products that need to be kept frozen",
    },
    {
        "name": "Main Products",
        "value": "main-products",
        "description": "Primary food products",
    },
    {
        "name": "Desserts and Drinks",
        "value": "desserts-drinks",
        "description": "Sweet treats and beverages",
    },
    {
        "name": "Packaging Materials",
        "value": "packaging-materials",
        "description": "Materials for packaging products",
    },
    {
        "name": "Cleaning Materials",
        "value": "cleaning-materials",
        "description": "Cleaning supplies and materials",
    },
]

DEFAULT_BRANCHES = [
    {
        "name": "Main Branch",
        "description": "Primary restaurant location",
        "address": "123 Main Street, Seoul",
        "phone": "+82-2-1234-5678",
        "email": "main@restaurant.com",
    },
    {
        "name": "Downtown Branch",
        "description": "Downtown location",
        "address": "456 Downtown Ave, Seoul",
        "phone": "+82-2-2345-6789",
        "email": "downtown@restaurant.com",
    },
]


def seed_admin() -> None:
    """
    Insert the default admin user if it does not already exist.
    Safe to call on every startup.
    """
    with get_db() as conn:
        repo = UserRepository(conn)
        if repo.get_by_login(ADMIN_USERNAME):
            logger.info("Seeder: admin user '%s' already exists – skipping.", ADMIN_USERNAME)
            return

        repo.create(
            email=ADMIN_EMAIL,
            username=ADMIN_USERNAME,
            hashed_password=hash_password(ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            full_name=ADMIN_FULL_NAME,
        )
        logger.info("Seeder: created default admin user '%s'.", ADMIN_USERNAME)


def seed_default_settings() -> None:
    """
    Fill each registry with its reference records when its table is empty.
    Records go through the registries so they obey the same rules as API writes.
    """
    with get_db() as conn:
        if CategoryRepository(conn).count() == 0:
            category_service = CategoryService(conn)
            for payload in DEFAULT_CATEGORIES:
                category_service.create_category(parse_payload(CategoryCreate, payload))
            logger.info("Seeder: created %s default categories.", len(DEFAULT_CATEGORIES))
        else:
            logger.info("Seeder: categories already present – skipping.")

        if BranchRepository(conn).count() == 0:
            branch_service = BranchService(conn)
            for payload in DEFAULT_BRANCHES:
                branch_service.create_branch(parse_payload(BranchCreate, payload))
            logger.info("Seeder: created %s default branches.", len(DEFAULT_BRANCHES))
        else:
            logger.info("Seeder: branches already present – skipping.")
