from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.common.db import session_scope
from app.common.storage import LocalBlobStore
from app.sites.models import ReferralSite

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"


def _site_form(**overrides):
    form = {
        "name": "reddybook247.com (ReddyBook)",
        "display_name": "ReddyBook",
        "url": "https://reddybook247.com",
        "button_color": "green",
    }
    form.update(overrides)
    return form


def _create(client, headers, files=None, **overrides):
    return client.post("/api/admin/sites", data=_site_form(**overrides), files=files, headers=headers)


def test_sites_require_admin(client, visitor_headers):
    assert client.get("/api/admin/sites").status_code == 401
    assert client.get("/api/admin/sites", headers=visitor_headers).status_code == 403


def test_create_list_update_delete(client, admin_headers):
    response = _create(client, admin_headers, logo_url="https://cdn.example.com/reddy.png")
    assert response.status_code == 201
    site = response.json()
    assert site["is_active"] is True
    assert site["logo_url"] == "https://cdn.example.com/reddy.png"

    response = client.put(
        f"/api/admin/sites/{site['id']}",
        data=_site_form(display_name="Reddy Book", button_color="purple"),
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["display_name"] == "Reddy Book"
    assert response.json()["button_color"] == "purple"

    listed = client.get("/api/admin/sites", headers=admin_headers).json()
    assert [s["id"] for s in listed] == [site["id"]]

    response = client.delete(f"/api/admin/sites/{site['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get("/api/admin/sites", headers=admin_headers).json() == []
    assert client.get("/api/intake/sites").json()["sites"] == []


def test_deactivated_site_hidden_from_intake(client, admin_headers):
    site = _create(client, admin_headers).json()

    response = client.patch(
        f"/api/admin/sites/{site['id']}/active", json={"is_active": False}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False
    assert client.get("/api/intake/sites").json()["sites"] == []

    client.patch(f"/api/admin/sites/{site['id']}/active", json={"is_active": True}, headers=admin_headers)
    assert len(client.get("/api/intake/sites").json()["sites"]) == 1


def test_uploaded_logo_wins_over_typed_url_and_is_served(client, admin_headers):
    response = _create(
        client,
        admin_headers,
        files={"logo": ("reddy.png", PNG_BYTES, "image/png")},
        logo_url="https://cdn.example.com/typed.png",
    )
    assert response.status_code == 201
    logo_url = response.json()["logo_url"]
    assert logo_url.startswith("/api/files/logos/")
    assert logo_url.endswith(".png")

    served = client.get(logo_url)
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_failed_logo_upload_saves_no_site(client, admin_headers, monkeypatch):
    def failing_upload(self, namespace, path, content, content_type=None):
        raise OSError("read-only file system")

    monkeypatch.setattr(LocalBlobStore, "upload", failing_upload)
    response = _create(client, admin_headers, files={"logo": ("reddy.png", PNG_BYTES, "image/png")})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to upload logo"
    with session_scope() as db:
        assert db.execute(select(ReferralSite)).first() is None


def test_unsupported_logo_type_rejected(client, admin_headers):
    response = _create(client, admin_headers, files={"logo": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400


def test_invalid_button_color_rejected(client, admin_headers):
    response = _create(client, admin_headers, button_color="orange")
    assert response.status_code == 422


def test_update_unknown_site(client, admin_headers):
    response = client.put("/api/admin/sites/missing", data=_site_form(), headers=admin_headers)
    assert response.status_code == 404


def test_standalone_logo_upload(client, admin_headers):
    response = client.post(
        "/api/admin/sites/logo",
        files={"file": ("brand.jpg", b"jpeg-bytes", "image/jpeg")},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["filename"] == "brand.jpg"
    assert client.get(body["url"]).content == b"jpeg-bytes"


def test_missing_file_is_404(client):
    assert client.get("/api/files/logos/nothing-here.png").status_code == 404


def test_save_failure_after_logo_upload_saves_no_site(client, admin_headers, monkeypatch, caplog):
    stored = []
    original_upload = LocalBlobStore.upload

    def recording_upload(self, namespace, path, content, content_type=None):
        stored.append(path)
        return original_upload(self, namespace, path, content, content_type)

    def failing_commit(self):
        raise OperationalError("INSERT", {}, Exception("connection lost"))

    monkeypatch.setattr(LocalBlobStore, "upload", recording_upload)
    monkeypatch.setattr(Session, "commit", failing_commit)
    with caplog.at_level("WARNING", logger="app.sites.service"):
        response = _create(client, admin_headers, files={"logo": ("reddy.png", PNG_BYTES, "image/png")})
    monkeypatch.undo()

    assert response.status_code == 500
    assert response.json()["detail"] == "Error saving site"
    assert len(stored) == 1
    assert "uploaded but site was not saved" in caplog.text
    with session_scope() as db:
        assert db.execute(select(ReferralSite)).first() is None
    # The uploaded file stays behind
    assert client.get(f"/api/files/logos/{stored[0]}").content == PNG_BYTES


def test_served_file_handle_is_closed(client, admin_headers, monkeypatch):
    logo_url = _create(
        client, admin_headers, files={"logo": ("reddy.png", PNG_BYTES, "image/png")}
    ).json()["logo_url"]

    handles = []
    original_open = LocalBlobStore.open

    def tracking_open(self, key):
        body, content_type = original_open(self, key)
        handles.append(body)
        return body, content_type

    monkeypatch.setattr(LocalBlobStore, "open", tracking_open)
    assert client.get(logo_url).content == PNG_BYTES
    assert len(handles) == 1
    assert handles[0].closed
