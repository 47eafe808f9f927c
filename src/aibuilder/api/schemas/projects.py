"""Project API envelopes."""

from __future__ import annotations

from pydantic import BaseModel

from aibuilder.models.events import ProjectEvent
from aibuilder.models.project import Project


class ProjectResponse(BaseModel):
    """Single project envelope."""

    success: bool = True
    data: Project
    message: str


class ProjectsResponse(BaseModel):
    """Collection envelope for projects."""

    success: bool = True
    data: list[Project]
    message: str


class ProjectEventsResponse(BaseModel):
    success: bool = True
    data: list[ProjectEvent]
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope. `error` carries a code, never internal detail."""

    success: bool = False
    message: str
    field: str | None = None
    error: str | None = None
