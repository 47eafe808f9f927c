"""Async SQLite persistence for catalog projects."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import TypeVar

import aiosqlite

from aibuilder.core.validation import ProjectChanges, ProjectDraft
from aibuilder.db.base import DEFAULT_TIMEOUT_SECONDS, StoreUnavailableError
from aibuilder.db.migrations import apply_migrations
from aibuilder.models.events import EventType, ProjectEvent
from aibuilder.models.project import Project, ProjectStatus

T = TypeVar("T")


def _timestamp(value: datetime) -> str:
    # Fixed precision keeps lexical order equal to chronological order.
    return value.astimezone(UTC).isoformat(timespec="microseconds")


class SQLiteStore:
    """Data access layer for projects and their audit events."""

    def __init__(self, db_path: Path, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._db_path = db_path
        self._timeout = timeout
        self._schema_ready = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = await aiosqlite.connect(self._db_path, timeout=self._timeout)
        conn.row_factory = aiosqlite.Row
        try:
            if not self._schema_ready:
                await apply_migrations(conn)
                self._schema_ready = True
            yield conn
        finally:
            await conn.close()

    async def create(self, draft: ProjectDraft) -> Project:
        now = datetime.now(UTC)
        project = Project(
            name=draft.name,
            description=draft.description,
            status=draft.status,
            created_at=now,
            updated_at=now,
        )
        event = ProjectEvent(
            project_id=project.id,
            event_type=EventType.PROJECT_CREATED,
            payload={"name": project.name, "status": project.status.value},
            timestamp=now,
        )
        await self._write("create", lambda conn: self._insert(conn, project, event))
        return project

    async def list(self) -> list[Project]:
        return await self._guarded("list", self._select_all())

    async def get(self, project_id: str) -> Project | None:
        return await self._guarded("get", self._select_one(project_id))

    async def update(self, project_id: str, changes: ProjectChanges) -> Project | None:
        return await self._write(
            "update", lambda conn: self._apply_update(conn, project_id, changes)
        )

    async def list_events(self, project_id: str) -> list[ProjectEvent]:
        return await self._guarded("list_events", self._select_events(project_id))

    async def _guarded(self, operation: str, work: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(work, timeout=self._timeout)
        except TimeoutError as exc:
            raise StoreUnavailableError(operation, f"timed out after {self._timeout}s") from exc
        except (aiosqlite.Error, OSError) as exc:
            raise StoreUnavailableError(operation, str(exc)) from exc

    async def _write(
        self,
        operation: str,
        statements: Callable[[aiosqlite.Connection], Awaitable[T]],
    ) -> T:
        """Run `statements` in one write transaction.

        The store timeout covers taking the write lock and the statements. A
        timeout there closes the connection uncommitted. Once the commit starts
        it is never cancelled; SQLite's busy timeout bounds it instead.
        """
        try:
            async with self.connection() as conn:
                result = await self._guarded(operation, self._begin(conn, statements))
                await asyncio.shield(conn.commit())
        except (aiosqlite.Error, OSError) as exc:
            raise StoreUnavailableError(operation, str(exc)) from exc
        return result

    @staticmethod
    async def _begin(
        conn: aiosqlite.Connection,
        statements: Callable[[aiosqlite.Connection], Awaitable[T]],
    ) -> T:
        await conn.execute("BEGIN IMMEDIATE")
        return await statements(conn)

    async def _insert(
        self, conn: aiosqlite.Connection, project: Project, event: ProjectEvent
    ) -> None:
        await conn.execute(
            """
            INSERT INTO projects(id, name, description, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                project.id,
                project.name,
                project.description,
                project.status.value,
                _timestamp(project.created_at),
                _timestamp(project.updated_at),
            ),
        )
        await self._append_event(conn, event)

    async def _select_all(self) -> list[Project]:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects ORDER BY created_at ASC, id ASC")
            rows = await cursor.fetchall()
        return [self._project_from_row(row) for row in rows]

    async def _select_one(self, project_id: str) -> Project | None:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._project_from_row(row)

    async def _apply_update(
        self, conn: aiosqlite.Connection, project_id: str, changes: ProjectChanges
    ) -> Project | None:
        cursor = await conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
        row = await cursor.fetchone()
        if row is None:
            return None

        project = self._project_from_row(row)
        if changes.name is not None:
            project.name = changes.name
        if changes.description is not None:
            project.description = changes.description
        if changes.status is not None:
            project.status = changes.status
        project.touch()

        await conn.execute(
            """
            UPDATE projects
            SET name = ?, description = ?, status = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                project.name,
                project.description,
                project.status.value,
                _timestamp(project.updated_at),
                project.id,
            ),
        )
        await self._append_event(
            conn,
            ProjectEvent(
                project_id=project.id,
                event_type=EventType.PROJECT_UPDATED,
                payload=changes.as_payload(),
                timestamp=project.updated_at,
            ),
        )
        return project

    async def _select_events(self, project_id: str) -> list[ProjectEvent]:
        async with self.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM project_events WHERE project_id = ? ORDER BY timestamp ASC, rowid ASC",
                (project_id,),
            )
            rows = await cursor.fetchall()
        return [self._event_from_row(row) for row in rows]

    @staticmethod
    async def _append_event(conn: aiosqlite.Connection, event: ProjectEvent) -> None:
        await conn.execute(
            """
            INSERT INTO project_events(id, project_id, event_type, payload, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id,
                event.project_id,
                event.event_type.value,
                json.dumps(event.payload),
                _timestamp(event.timestamp),
            ),
        )

    @staticmethod
    def _project_from_row(row: aiosqlite.Row) -> Project:
        return Project(
            id=str(row["id"]),
            name=str(row["name"]),
            description=str(row["description"]),
            status=ProjectStatus(str(row["status"])),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            updated_at=datetime.fromisoformat(str(row["updated_at"])),
        )

    @staticmethod
    def _event_from_row(row: aiosqlite.Row) -> ProjectEvent:
        return ProjectEvent(
            id=str(row["id"]),
            project_id=str(row["project_id"]),
            event_type=EventType(str(row["event_type"])),
            payload=json.loads(str(row["payload"])),
            timestamp=datetime.fromisoformat(str(row["timestamp"])),
        )
