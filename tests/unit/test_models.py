from datetime import UTC, datetime, timedelta

from aibuilder.models.events import EventType, ProjectEvent
from aibuilder.models.project import Project, ProjectStatus


def test_project_defaults() -> None:
    project = Project(name="demo")
    assert project.status is ProjectStatus.DRAFT
    assert project.description == ""
    assert project.id


def test_project_serializes_camel_case_timestamps() -> None:
    data = Project(name="demo").model_dump(mode="json", by_alias=True)
    assert {"id", "name", "description", "status", "createdAt", "updatedAt"} == set(data)
    assert data["status"] == "draft"


def test_project_accepts_alias_and_field_names() -> None:
    stamp = datetime(2026, 1, 1, tzinfo=UTC)
    by_alias = Project.model_validate({"name": "demo", "createdAt": stamp, "updatedAt": stamp})
    by_name = Project(name="demo", created_at=stamp, updated_at=stamp)
    assert by_alias.created_at == by_name.created_at == stamp


def test_touch_never_moves_before_creation() -> None:
    future = datetime.now(UTC) + timedelta(days=1)
    project = Project(name="demo", created_at=future, updated_at=future)
    project.touch()
    assert project.updated_at == future


def test_event_defaults() -> None:
    event = ProjectEvent(project_id="p1", event_type=EventType.PROJECT_CREATED)
    assert event.id
    assert event.payload == {}
    assert event.model_dump(mode="json", by_alias=True)["eventType"] == "project.created"
