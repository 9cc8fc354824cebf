import os
import sys
import tempfile
from pathlib import Path

# Settings are read once at import time, so point them at throwaway storage first
_TMP_DIR = Path(tempfile.mkdtemp(prefix="reddybook-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'app.db'}"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["NUMBER_STORE_URL"] = f"sqlite:///{_TMP_DIR / 'numbers.db'}"
os.environ["ADMIN_PASSWORD"] = "letmein"

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import main  # noqa: E402
from app.common.db import Base, get_sync_engine, init_db, session_scope  # noqa: E402
from app.common.security import get_password_hash  # noqa: E402
from app.auth.models import AuthIdentity  # noqa: E402
from app.admin.models import AdminRole, AdminUser  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    init_db()
    yield
    Base.metadata.drop_all(get_sync_engine())


@pytest.fixture
def client():
    return TestClient(main.app)


def create_identity(email: str, password: str = "secret123") -> str:
    with session_scope() as db:
        identity = AuthIdentity(email=email, hashed_password=get_password_hash(password))
        db.add(identity)
        db.flush()
        return identity.id


def grant_admin(user_id: str, role: AdminRole = AdminRole.ADMIN) -> str:
    with session_scope() as db:
        entry = AdminUser(user_id=user_id, role=role)
        db.add(entry)
        db.flush()
        return entry.id


def login(client: TestClient, email: str, password: str = "secret123") -> str:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def admin_headers(client):
    grant_admin(create_identity("boss@example.com"))
    return {"Authorization": f"Bearer {login(client, 'boss@example.com')}"}


@pytest.fixture
def visitor_headers(client):
    create_identity("someone@example.com")
    return {"Authorization": f"Bearer {login(client, 'someone@example.com')}"}
