"""In-process project store for development and tests."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

from aibuilder.core.validation import ProjectChanges, ProjectDraft
from aibuilder.db.base import DEFAULT_TIMEOUT_SECONDS, StoreUnavailableError
from aibuilder.models.events import EventType, ProjectEvent
from aibuilder.models.project import Project


class MemoryStore:
    """Dict-backed store; one lock serialises writers and snapshot reads."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._timeout = timeout
        self._projects: dict[str, Project] = {}
        self._events: list[ProjectEvent] = []
        self._lock = asyncio.Lock()

    async def create(self, draft: ProjectDraft) -> Project:
        now = datetime.now(UTC)
        project = Project(
            name=draft.name,
            description=draft.description,
            status=draft.status,
            created_at=now,
            updated_at=now,
        )
        async with self._locked("create"):
            if project.id in self._projects:
                raise StoreUnavailableError("create", f"duplicate id {project.id}")
            self._projects[project.id] = project
            self._events.append(
                ProjectEvent(
                    project_id=project.id,
                    event_type=EventType.PROJECT_CREATED,
                    payload={"name": project.name, "status": project.status.value},
                    timestamp=now,
                )
            )
        return project.model_copy(deep=True)

    async def list(self) -> list[Project]:
        async with self._locked("list"):
            snapshot = sorted(self._projects.values(), key=lambda item: (item.created_at, item.id))
            return [project.model_copy(deep=True) for project in snapshot]

    async def get(self, project_id: str) -> Project | None:
        async with self._locked("get"):
            project = self._projects.get(project_id)
            return project.model_copy(deep=True) if project is not None else None

    async def update(self, project_id: str, changes: ProjectChanges) -> Project | None:
        async with self._locked("update"):
            current = self._projects.get(project_id)
            if current is None:
                return None
            project = current.model_copy(deep=True)
            if changes.name is not None:
                project.name = changes.name
            if changes.description is not None:
                project.description = changes.description
            if changes.status is not None:
                project.status = changes.status
            project.touch()
            self._projects[project_id] = project
            self._events.append(
                ProjectEvent(
                    project_id=project_id,
                    event_type=EventType.PROJECT_UPDATED,
                    payload=changes.as_payload(),
                    timestamp=project.updated_at,
                )
            )
            return project.model_copy(deep=True)

    async def list_events(self, project_id: str) -> list[ProjectEvent]:
        async with self._locked("list_events"):
            return [
                event.model_copy(deep=True)
                for event in self._events
                if event.project_id == project_id
            ]

    def _locked(self, operation: str) -> _TimedLock:
        return _TimedLock(self._lock, operation, self._timeout)


class _TimedLock:
    """Acquire a lock or give up with `StoreUnavailableError`."""

    def __init__(self, lock: asyncio.Lock, operation: str, timeout: float) -> None:
        self._lock = lock
        self._operation = operation
        self._timeout = timeout

    async def __aenter__(self) -> None:
        try:
            await asyncio.wait_for(self._lock.acquire(), timeout=self._timeout)
        except TimeoutError as exc:
            raise StoreUnavailableError(
                self._operation, f"lock not acquired within {self._timeout}s"
            ) from exc

    async def __aexit__(self, *exc_info: object) -> None:
        self._lock.release()
