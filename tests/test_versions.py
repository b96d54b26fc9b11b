"""Version history tests."""

from mockflow.models.mockup import MockupVersion
from mockflow.services.version_service import VersionService


def versions_url(mockup_id, suffix=""):
    return f"/api/v1/mockups/{mockup_id}/versions{suffix}"


def save_version(client, headers, mockup_id, description=None):
    return client.post(
        versions_url(mockup_id), headers=headers, json={"change_description": description}
    )


def test_version_numbers_are_sequential(client, auth_headers, create_mockup):
    """Test that snapshots are numbered 1, 2, 3."""
    mockup = create_mockup(auth_headers)

    numbers = []
    for i in range(3):
        response = save_version(client, auth_headers, mockup["id"], f"Step {i}")
        assert response.status_code == 201
        numbers.append(response.json()["version_number"])

    assert numbers == [1, 2, 3]


def test_version_numbers_continue_past_gaps(client, auth_headers, create_mockup):
    """Test that deleting an older version does not change the next number."""
    mockup = create_mockup(auth_headers)
    versions = [save_version(client, auth_headers, mockup["id"]).json() for _ in range(3)]

    response = client.delete(
        versions_url(mockup["id"], f"/{versions[1]['id']}"), headers=auth_headers
    )
    assert response.status_code == 204

    response = save_version(client, auth_headers, mockup["id"])
    assert response.json()["version_number"] == 4

    listed = client.get(versions_url(mockup["id"]), headers=auth_headers).json()
    assert [v["version_number"] for v in listed] == [4, 3, 1]


def test_numbering_is_per_mockup(client, auth_headers, create_mockup):
    """Test that each mockup has its own version sequence."""
    first = create_mockup(auth_headers, name="First")
    second = create_mockup(auth_headers, name="Second")

    save_version(client, auth_headers, first["id"])
    save_version(client, auth_headers, first["id"])
    response = save_version(client, auth_headers, second["id"])

    assert response.json()["version_number"] == 1


def test_version_snapshots_content(client, auth_headers, create_mockup):
    """Test that a version captures the mockup content at save time."""
    mockup = create_mockup(
        auth_headers,
        appearance={"theme": "dark"},
        thumbnail_url="https://example.com/thumb.png",
    )
    response = save_version(client, auth_headers, mockup["id"], "Initial")
    data = response.json()

    assert data["mockup_id"] == mockup["id"]
    assert data["user_id"] == auth_headers.user_id
    assert data["name"] == "Demo"
    assert data["data"] == mockup["data"]
    assert data["appearance"] == {"theme": "dark"}
    assert data["thumbnail_url"] == "https://example.com/thumb.png"
    assert data["change_description"] == "Initial"


def test_list_versions_is_summary_only(client, auth_headers, create_mockup):
    """Test that the version list leaves out the content payload."""
    mockup = create_mockup(auth_headers)
    save_version(client, auth_headers, mockup["id"])

    response = client.get(versions_url(mockup["id"]), headers=auth_headers)
    assert response.status_code == 200
    entry = response.json()[0]
    assert entry["version_number"] == 1
    assert "data" not in entry
    assert "appearance" not in entry


def test_list_versions_capped(client, db, auth_headers, create_mockup):
    """Test that only the 50 most recent versions are listed."""
    mockup = create_mockup(auth_headers)
    for number in range(1, 56):
        db.add(
            MockupVersion(
                mockup_id=mockup["id"],
                user_id=auth_headers.user_id,
                version_number=number,
                name="Demo",
                data={},
                appearance={},
            )
        )
    db.commit()

    listed = client.get(versions_url(mockup["id"]), headers=auth_headers).json()
    assert len(listed) == 50
    assert listed[0]["version_number"] == 55
    assert listed[-1]["version_number"] == 6


def test_get_version_has_full_payload(client, auth_headers, create_mockup):
    """Test fetching a single version."""
    mockup = create_mockup(auth_headers)
    version = save_version(client, auth_headers, mockup["id"]).json()

    response = client.get(versions_url(mockup["id"], f"/{version['id']}"), headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"] == mockup["data"]


def test_get_version_of_other_mockup(client, auth_headers, create_mockup):
    """Test that a version id must belong to the mockup in the URL."""
    first = create_mockup(auth_headers, name="First")
    second = create_mockup(auth_headers, name="Second")
    version = save_version(client, auth_headers, first["id"]).json()

    response = client.get(versions_url(second["id"], f"/{version['id']}"), headers=auth_headers)
    assert response.status_code == 404


def test_restore_version(client, auth_headers, create_mockup):
    """Test that restore copies content back and leaves visibility alone."""
    project = client.post("/api/v1/projects", headers=auth_headers, json={"name": "P"}).json()
    mockup = create_mockup(auth_headers, name="Original", project_id=project["id"])
    version = save_version(client, auth_headers, mockup["id"]).json()

    client.put(
        f"/api/v1/mockups/{mockup['id']}",
        headers=auth_headers,
        json={"name": "Changed", "data": {"messages": []}, "is_public": True},
    )

    response = client.post(
        versions_url(mockup["id"], f"/{version['id']}/restore"), headers=auth_headers
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Restored to version 1"

    restored = body["mockup"]
    assert restored["name"] == "Original"
    assert restored["data"] == mockup["data"]
    assert restored["is_public"] is True
    assert restored["project_id"] == project["id"]
    assert restored["owner_id"] == auth_headers.user_id


def test_restore_does_not_create_version(client, auth_headers, create_mockup):
    """Test that restoring leaves the history untouched."""
    mockup = create_mockup(auth_headers)
    version = save_version(client, auth_headers, mockup["id"]).json()

    client.post(versions_url(mockup["id"], f"/{version['id']}/restore"), headers=auth_headers)

    listed = client.get(versions_url(mockup["id"]), headers=auth_headers).json()
    assert len(listed) == 1


def test_versions_are_owner_only(client, auth_headers, other_headers, create_mockup):
    """Test that even an editor cannot use version history."""
    mockup = create_mockup(auth_headers)
    version = save_version(client, auth_headers, mockup["id"]).json()
    client.post(
        f"/api/v1/mockups/{mockup['id']}/shares",
        headers=auth_headers,
        json={"email": other_headers.email, "permission": "edit"},
    )

    assert client.get(versions_url(mockup["id"]), headers=other_headers).status_code == 404
    assert save_version(client, other_headers, mockup["id"]).status_code == 404
    response = client.post(
        versions_url(mockup["id"], f"/{version['id']}/restore"), headers=other_headers
    )
    assert response.status_code == 404
    response = client.delete(versions_url(mockup["id"], f"/{version['id']}"), headers=other_headers)
    assert response.status_code == 404


def test_versions_require_auth(client, auth_headers, create_mockup):
    mockup = create_mockup(auth_headers, is_public=True)
    assert client.get(versions_url(mockup["id"])).status_code == 401


def test_change_description_too_long(client, auth_headers, create_mockup):
    """Test the change description length limit."""
    mockup = create_mockup(auth_headers)
    response = save_version(client, auth_headers, mockup["id"], "x" * 501)
    assert response.status_code == 422


def test_concurrent_version_number_conflict(client, monkeypatch, auth_headers, create_mockup):
    """Test that losing the race for a version number is reported as a conflict."""
    mockup = create_mockup(auth_headers)
    assert save_version(client, auth_headers, mockup["id"]).status_code == 201

    # Simulate another writer taking the number between read and insert
    monkeypatch.setattr(VersionService, "next_version_number", lambda self, mockup_id: 1)

    response = save_version(client, auth_headers, mockup["id"])
    assert response.status_code == 409

    monkeypatch.undo()
    response = save_version(client, auth_headers, mockup["id"])
    assert response.status_code == 201
    assert response.json()["version_number"] == 2


def test_delete_mockup_removes_versions(client, db, auth_headers, create_mockup):
    """Test that deleting a mockup deletes its history."""
    mockup = create_mockup(auth_headers)
    save_version(client, auth_headers, mockup["id"])
    save_version(client, auth_headers, mockup["id"])

    response = client.delete(f"/api/v1/mockups/{mockup['id']}", headers=auth_headers)
    assert response.status_code == 204

    db.expire_all()
    assert db.query(MockupVersion).filter(MockupVersion.mockup_id == mockup["id"]).count() == 0
