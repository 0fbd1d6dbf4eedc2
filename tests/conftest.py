import os
import tempfile

# Point the app at a throwaway database/log file before anything imports settings.
_TMP_DIR = tempfile.mkdtemp(prefix="settings-service-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_FILE_PATH"] = os.path.join(_TMP_DIR, "app.log")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SEED_ADMIN"] = "false"
os.environ["SEED_DEFAULT_SETTINGS"] = "false"

import pytest
from fastapi.testclient import TestClient

from backend.core.security import create_access_token, hash_password
from backend.db.database import get_connection, get_db, init_db
from backend.db.seeder import seed_default_settings
from backend.main import app
from backend.models.user import UserRole
from backend.repositories.user_repository import UserRepository

TEST_PASSWORD = "Passw0rd!"


@pytest.fixture(scope="session")
def password_hash():
    return hash_password(TEST_PASSWORD)


@pytest.fixture(autouse=True)
def fresh_db():
    """Empty every table and reseed the reference categories/branches."""
    init_db()
    conn = get_connection()
    try:
        for table in ("categories", "branches", "users"):
            conn.execute(f"DELETE FROM {table}")
        conn.commit()
    finally:
        conn.close()
    seed_default_settings()
    yield


@pytest.fixture
def conn():
    with get_db() as connection:
        yield connection


def _create_user(username, role, password_hash, is_active=True):
    with get_db() as connection:
        return UserRepository(connection).create(
            email=f"{username}@example.com",
            username=username,
            hashed_password=password_hash,
            role=role,
            is_active=is_active,
        )


@pytest.fixture
def admin_user(password_hash):
    return _create_user("admin", UserRole.ADMIN, password_hash)


@pytest.fixture
def employee_user(password_hash):
    return _create_user("employee", UserRole.EMPLOYEE, password_hash)


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user.id, admin_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def employee_headers(employee_user):
    token = create_access_token(employee_user.id, employee_user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client():
    return TestClient(app)
