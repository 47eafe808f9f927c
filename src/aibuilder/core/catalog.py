"""Catalog service: validated project operations over a record store."""

from __future__ import annotations

import logging
from typing import Any

from aibuilder.core.errors import InvalidInputError, ProjectNotFoundError, StoreFailureError
from aibuilder.core.validation import ValidationError, validate_create, validate_update
from aibuilder.db.base import ProjectStore, StoreUnavailableError
from aibuilder.models.events import ProjectEvent
from aibuilder.models.project import Project

logger = logging.getLogger(__name__)


class CatalogService:
    """Single entry point for project reads and mutations.

    Every call either completes fully or raises a `CatalogError`. Validation
    runs before the store is touched, and store errors are not retried here.
    """

    def __init__(self, store: ProjectStore) -> None:
        self._store = store

    async def create_project(self, payload: Any) -> Project:
        try:
            draft = validate_create(payload)
        except ValidationError as exc:
            raise InvalidInputError(exc.field, exc.message) from exc

        try:
            project = await self._store.create(draft)
        except StoreUnavailableError as exc:
            logger.error("Project create failed: %s", exc, exc_info=exc)
            raise StoreFailureError("create") from exc

        logger.info("Created project id=%s name=%s", project.id, project.name)
        return project

    async def list_projects(self) -> list[Project]:
        try:
            return await self._store.list()
        except StoreUnavailableError as exc:
            logger.error("Project listing failed: %s", exc, exc_info=exc)
            raise StoreFailureError("list") from exc

    async def get_project(self, project_id: str) -> Project:
        try:
            project = await self._store.get(project_id)
        except StoreUnavailableError as exc:
            logger.error("Project lookup failed id=%s: %s", project_id, exc, exc_info=exc)
            raise StoreFailureError("get") from exc
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def update_project(self, project_id: str, payload: Any) -> Project:
        try:
            changes = validate_update(payload)
        except ValidationError as exc:
            raise InvalidInputError(exc.field, exc.message) from exc

        try:
            project = await self._store.update(project_id, changes)
        except StoreUnavailableError as exc:
            logger.error("Project update failed id=%s: %s", project_id, exc, exc_info=exc)
            raise StoreFailureError("update") from exc
        if project is None:
            raise ProjectNotFoundError(project_id)

        logger.info("Updated project id=%s fields=%s", project.id, sorted(changes.as_payload()))
        return project

    async def list_project_events(self, project_id: str) -> list[ProjectEvent]:
        await self.get_project(project_id)
        try:
            return await self._store.list_events(project_id)
        except StoreUnavailableError as exc:
            logger.error("Event listing failed id=%s: %s", project_id, exc, exc_info=exc)
            raise StoreFailureError("list_events") from exc
