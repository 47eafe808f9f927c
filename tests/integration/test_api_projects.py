import logging
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from aibuilder.api.app import create_app
from aibuilder.api.deps import get_catalog_service
from aibuilder.config import Settings
from aibuilder.core.catalog import CatalogService
from aibuilder.core.validation import DESCRIPTION_MESSAGE, NAME_MESSAGE
from tests.support.stores import BrokenStore


@pytest.fixture(params=["memory", "sqlite"])
def client(request: pytest.FixtureRequest, tmp_path: Path) -> TestClient:
    settings = Settings(store_backend=request.param, db_path=tmp_path / "catalog.db")
    return TestClient(create_app(settings))


def test_list_projects_empty(client: TestClient) -> None:
    response = client.get("/api/projects")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": [],
        "message": "Projects retrieved successfully",
    }


def test_create_and_list_project(client: TestClient) -> None:
    create = client.post("/api/projects", json={"name": " Demo ", "description": "x"})
    assert create.status_code == 201
    body = create.json()
    assert body["success"] is True
    assert body["message"] == "Project created successfully"
    project = body["data"]
    assert project["name"] == "Demo"
    assert project["description"] == "x"
    assert project["status"] == "draft"
    assert project["createdAt"] == project["updatedAt"]

    listing = client.get("/api/projects")
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()["data"]] == [project["id"]]


def test_create_rejects_blank_name(client: TestClient) -> None:
    response = client.post("/api/projects", json={"name": "  "})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": NAME_MESSAGE, "field": "name"}
    assert client.get("/api/projects").json()["data"] == []


def test_create_rejects_non_string_description(client: TestClient) -> None:
    response = client.post("/api/projects", json={"name": "A", "description": 42})
    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "message": DESCRIPTION_MESSAGE,
        "field": "description",
    }


def test_create_rejects_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/projects",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid JSON in request body"}


def test_create_rejects_non_object_json(client: TestClient) -> None:
    response = client.post("/api/projects", json=["Demo"])
    assert response.status_code == 400
    assert response.json()["field"] == "body"


def test_get_update_and_events(client: TestClient) -> None:
    project_id = client.post("/api/projects", json={"name": "Demo"}).json()["data"]["id"]

    fetched = client.get(f"/api/projects/{project_id}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["id"] == project_id

    patched = client.patch(f"/api/projects/{project_id}", json={"status": "active"})
    assert patched.status_code == 200
    data = patched.json()["data"]
    assert data["status"] == "active"
    assert datetime.fromisoformat(data["updatedAt"]) >= datetime.fromisoformat(data["createdAt"])

    events = client.get(f"/api/projects/{project_id}/events")
    assert events.status_code == 200
    assert [event["eventType"] for event in events.json()["data"]] == [
        "project.created",
        "project.updated",
    ]


def test_update_rejects_empty_patch(client: TestClient) -> None:
    project_id = client.post("/api/projects", json={"name": "Demo"}).json()["data"]["id"]
    response = client.patch(f"/api/projects/{project_id}", json={})
    assert response.status_code == 400
    assert response.json()["field"] == "body"


def test_unknown_project_returns_404(client: TestClient) -> None:
    for response in (
        client.get("/api/projects/missing"),
        client.patch("/api/projects/missing", json={"name": "x"}),
        client.get("/api/projects/missing/events"),
    ):
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Project not found"}


def test_store_failure_returns_generic_500() -> None:
    app = create_app(Settings(store_backend="memory"))
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(
        BrokenStore(reason="database disk image is malformed")
    )
    client = TestClient(app)

    listing = client.get("/api/projects")
    assert listing.status_code == 500
    assert listing.json() == {
        "success": False,
        "message": "Failed to fetch projects",
        "error": "store_failure",
    }

    create = client.post("/api/projects", json={"name": "Demo"})
    assert create.status_code == 500
    assert create.json()["message"] == "Failed to create project"
    assert "malformed" not in create.text


def test_store_failure_is_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    app = create_app(Settings(store_backend="memory"))
    app.dependency_overrides[get_catalog_service] = lambda: CatalogService(
        BrokenStore(reason="database is locked")
    )
    client = TestClient(app)

    with caplog.at_level(logging.ERROR, logger="aibuilder"):
        response = client.get("/api/projects")

    assert response.status_code == 500
    errors = [
        record
        for record in caplog.records
        if record.levelno == logging.ERROR and record.name.startswith("aibuilder")
    ]
    assert len(errors) == 1
    assert errors[0].name == "aibuilder.core.catalog"
    assert "database is locked" in errors[0].getMessage()
