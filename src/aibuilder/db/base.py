"""Record store contract shared by all storage backends."""

from __future__ import annotations

from typing import Protocol

from aibuilder.core.validation import ProjectChanges, ProjectDraft
from aibuilder.models.events import ProjectEvent
from aibuilder.models.project import Project

DEFAULT_TIMEOUT_SECONDS = 5.0


class StoreUnavailableError(RuntimeError):
    """Storage medium could not complete an operation in time or at all."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class ProjectStore(Protocol):
    """Keyed project storage.

    Implementations own identity and timestamps, return copies only, and
    bound every call by their own timeout.
    """

    async def create(self, draft: ProjectDraft) -> Project: ...

    async def list(self) -> list[Project]: ...

    async def get(self, project_id: str) -> Project | None: ...

    async def update(self, project_id: str, changes: ProjectChanges) -> Project | None: ...

    async def list_events(self, project_id: str) -> list[ProjectEvent]: ...
