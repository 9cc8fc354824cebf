from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.admin.models import AdminUser
from app.auth.models import AuthIdentity
from app.common.db import session_scope
from app.sites.models import ReferralSite
from app.submissions.models import Submission

from conftest import create_identity, grant_admin, login


def test_admin_session_requires_login(client):
    response = client.get("/api/admin/session")
    assert response.status_code == 401


def test_signed_in_non_admin_is_denied(client, visitor_headers):
    response = client.get("/api/admin/session", headers=visitor_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "Access Denied. You don't have admin privileges."

    # The session itself is still good
    assert client.get("/api/auth/session", headers=visitor_headers).status_code == 200


def test_admin_session_lists_tabs(client, admin_headers):
    response = client.get("/api/admin/session", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "boss@example.com"
    assert body["role"] == "admin"
    assert body["tabs"] == ["submissions", "sites", "admins", "whatsapp"]


def test_garbage_token_is_unauthenticated(client):
    response = client.get("/api/admin/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_dashboard_counts(client, admin_headers):
    with session_scope() as db:
        db.add_all([
            Submission(name="A", mobile_number="9876543210", selected_website="X",
                       status="pending", submitted_at=datetime(2025, 1, 1)),
            Submission(name="B", mobile_number="9876543211", selected_website="X",
                       status="contacted", submitted_at=datetime(2025, 1, 2)),
            ReferralSite(name="x.com", display_name="X", url="https://x.com"),
            ReferralSite(name="y.com", display_name="Y", url="https://y.com", is_active=False),
        ])

    response = client.get("/api/admin/dashboard", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {
        "submissions": 2,
        "pending": 1,
        "contacted": 1,
        "sites": 2,
        "active_sites": 1,
        "admins": 1,
    }


def test_create_and_remove_admin(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={"email": "Helper@Example.com", "password": "helper123", "role": "moderator"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["email"] == "helper@example.com"
    assert created["role"] == "moderator"

    listed = client.get("/api/admin/users", headers=admin_headers).json()
    assert listed[0]["id"] == created["id"]
    assert len(listed) == 2

    helper_headers = {"Authorization": f"Bearer {login(client, 'helper@example.com', 'helper123')}"}
    assert client.get("/api/admin/session", headers=helper_headers).status_code == 200

    response = client.delete(f"/api/admin/users/{created['id']}", headers=admin_headers)
    assert response.status_code == 200

    # The identity survives; only back-office access is gone
    assert client.get("/api/admin/session", headers=helper_headers).status_code == 403
    assert login(client, "helper@example.com", "helper123")


def test_create_admin_with_taken_email(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={"email": "boss@example.com", "password": "another1", "role": "admin"},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already registered"


def test_remove_unknown_admin(client, admin_headers):
    assert client.delete("/api/admin/users/missing", headers=admin_headers).status_code == 404


def test_failed_grant_leaves_identity_without_admin_row(client, admin_headers, monkeypatch):
    original_commit = Session.commit
    calls = []

    def flaky_commit(self):
        calls.append(1)
        if len(calls) == 2:
            raise OperationalError("INSERT", {}, Exception("connection lost"))
        return original_commit(self)

    monkeypatch.setattr(Session, "commit", flaky_commit)
    response = client.post(
        "/api/admin/users",
        json={"email": "orphan@example.com", "password": "orphan123", "role": "admin"},
        headers=admin_headers,
    )
    monkeypatch.undo()

    assert response.status_code == 500
    assert response.json()["detail"] == "Error creating admin user"

    with session_scope() as db:
        identity = db.execute(
            select(AuthIdentity).where(AuthIdentity.email == "orphan@example.com")
        ).scalar_one()
        entries = db.execute(select(AdminUser).where(AdminUser.user_id == identity.id)).all()
    assert entries == []


def test_directory_entry_for_unknown_identity_lists_without_email(client, admin_headers):
    grant_admin("no-such-identity")
    listed = client.get("/api/admin/users", headers=admin_headers).json()
    assert any(item["user_id"] == "no-such-identity" and item["email"] is None for item in listed)


def test_inactive_identity_is_unauthenticated(client):
    user_id = create_identity("gone@example.com")
    grant_admin(user_id)
    headers = {"Authorization": f"Bearer {login(client, 'gone@example.com')}"}

    with session_scope() as db:
        db.get(AuthIdentity, user_id).is_active = False

    assert client.get("/api/admin/session", headers=headers).status_code == 401
