"""SQLite migrations for catalog storage."""

from __future__ import annotations

import aiosqlite

SCHEMA_VERSION = 1


async def schema_version(conn: aiosqlite.Connection) -> int:
    """Return the recorded schema version, 0 for a fresh database."""
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY
        )
        """
    )
    cursor = await conn.execute("SELECT MAX(version) FROM schema_migrations")
    rows = await cursor.fetchall()
    await cursor.close()
    latest = rows[0][0] if rows else None
    return int(latest) if latest is not None else 0


async def apply_migrations(conn: aiosqlite.Connection) -> None:
    """Create catalog schema when the recorded version is behind."""
    if await schema_version(conn) >= SCHEMA_VERSION:
        return

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS projects (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL CHECK (length(trim(name)) > 0),
            description TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL CHECK (updated_at >= created_at)
        )
        """
    )

    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_projects_created ON projects(created_at, id)"
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS project_events (
            id TEXT PRIMARY KEY,
            project_id TEXT NOT NULL,
            event_type TEXT NOT NULL,
            payload TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            FOREIGN KEY(project_id) REFERENCES projects(id)
        )
        """
    )

    await conn.execute(
        "INSERT OR IGNORE INTO schema_migrations(version) VALUES (?)", (SCHEMA_VERSION,)
    )
    await conn.commit()
