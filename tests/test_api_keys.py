"""API key authentication tests."""

from datetime import UTC, datetime, timedelta

from mockflow.models.user import User
from mockflow.services.api_keys import create_api_key


def key_headers(api_key):
    return {"X-API-Key": api_key.key}


def test_api_key_can_create_and_read(client, db, auth_headers):
    """Test that a full API key acts as its user."""
    user = db.get(User, auth_headers.user_id)
    api_key = create_api_key(db, user, "CI")
    assert api_key.key.startswith("mk_")
    assert len(api_key.key) == 67

    response = client.post(
        "/api/v1/mockups",
        headers=key_headers(api_key),
        json={"name": "From key", "type": "chat", "platform": "imessage", "data": {}},
    )
    assert response.status_code == 201
    assert response.json()["owner_id"] == user.id

    db.refresh(api_key)
    assert api_key.last_used_at is not None


def test_read_only_key_cannot_save(client, db, auth_headers, create_mockup):
    """Test that a key without save permission can read but not write."""
    mockup = create_mockup(auth_headers)
    user = db.get(User, auth_headers.user_id)
    api_key = create_api_key(db, user, "Read only", can_save_mockups=False)

    response = client.get(f"/api/v1/mockups/{mockup['id']}", headers=key_headers(api_key))
    assert response.status_code == 200
    assert response.json()["permission"] == "owner"

    response = client.post(
        "/api/v1/mockups",
        headers=key_headers(api_key),
        json={"name": "Nope", "type": "chat", "platform": "imessage", "data": {}},
    )
    assert response.status_code == 403

    response = client.put(
        f"/api/v1/mockups/{mockup['id']}", headers=key_headers(api_key), json={"name": "Nope"}
    )
    assert response.status_code == 403

    response = client.post(
        f"/api/v1/mockups/{mockup['id']}/versions", headers=key_headers(api_key), json={}
    )
    assert response.status_code == 403


def test_invalid_api_key(client):
    response = client.get("/api/v1/mockups", headers={"X-API-Key": "mk_" + "0" * 64})
    assert response.status_code == 401

    response = client.get("/api/v1/mockups", headers={"X-API-Key": "not-a-key"})
    assert response.status_code == 401


def test_expired_api_key(client, db, auth_headers):
    """Test that an expired key is rejected."""
    user = db.get(User, auth_headers.user_id)
    api_key = create_api_key(db, user, "Old", expires_in_days=1)
    api_key.expires_at = datetime.now(UTC) - timedelta(minutes=1)
    db.commit()

    response = client.get("/api/v1/mockups", headers=key_headers(api_key))
    assert response.status_code == 401


def test_inactive_api_key(client, db, auth_headers):
    user = db.get(User, auth_headers.user_id)
    api_key = create_api_key(db, user, "Revoked")
    api_key.is_active = False
    db.commit()

    response = client.get("/api/v1/mockups", headers=key_headers(api_key))
    assert response.status_code == 401


def test_api_key_endpoints(client, auth_headers):
    """Test issuing, listing and revoking keys over HTTP."""
    response = client.post(
        "/api/v1/api-keys",
        headers=auth_headers,
        json={"name": "Figma plugin", "can_save_mockups": False, "expires_in_days": 30},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["key"].startswith("mk_")
    assert created["can_save_mockups"] is False
    assert created["expires_at"] is not None

    response = client.get("/api/v1/api-keys", headers=auth_headers)
    assert response.status_code == 200
    listed = response.json()
    assert len(listed) == 1
    preview = listed[0]["key_preview"]
    assert "key" not in listed[0]
    assert preview.endswith(created["key"][-8:])
    assert preview[3:-8] == "*" * 56

    response = client.delete(f"/api/v1/api-keys/{created['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/api-keys", headers=auth_headers).json() == []

    response = client.get("/api/v1/mockups", headers={"X-API-Key": created["key"]})
    assert response.status_code == 401


def test_api_keys_are_private(client, auth_headers, other_headers):
    created = client.post(
        "/api/v1/api-keys", headers=auth_headers, json={"name": "Mine"}
    ).json()

    assert client.get("/api/v1/api-keys", headers=other_headers).json() == []
    response = client.delete(f"/api/v1/api-keys/{created['id']}", headers=other_headers)
    assert response.status_code == 404


def test_api_key_cannot_manage_keys(client, auth_headers):
    """Test that a key cannot be used to issue or list more keys."""
    created = client.post(
        "/api/v1/api-keys", headers=auth_headers, json={"name": "Automation"}
    ).json()
    headers = {"X-API-Key": created["key"]}

    assert client.get("/api/v1/api-keys", headers=headers).status_code == 403
    response = client.post("/api/v1/api-keys", headers=headers, json={"name": "Another"})
    assert response.status_code == 403


def test_read_only_key_cannot_change_projects(client, db, auth_headers, create_mockup):
    """Test that a key without save permission can list projects but not change them."""
    project = client.post("/api/v1/projects", headers=auth_headers, json={"name": "Launch"}).json()
    create_mockup(auth_headers, project_id=project["id"])
    user = db.get(User, auth_headers.user_id)
    api_key = create_api_key(db, user, "Read only", can_save_mockups=False)
    headers = key_headers(api_key)

    response = client.get(f"/api/v1/projects/{project['id']}", headers=headers)
    assert response.status_code == 200

    response = client.post("/api/v1/projects", headers=headers, json={"name": "Nope"})
    assert response.status_code == 403

    response = client.put(
        f"/api/v1/projects/{project['id']}", headers=headers, json={"name": "Nope"}
    )
    assert response.status_code == 403

    response = client.delete(f"/api/v1/projects/{project['id']}", headers=headers)
    assert response.status_code == 403

    response = client.get(f"/api/v1/projects/{project['id']}", headers=auth_headers)
    assert response.json()["name"] == "Launch"
    assert response.json()["mockup_count"] == 1
