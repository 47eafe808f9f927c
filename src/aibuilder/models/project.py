"""Project domain models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProjectStatus(str, Enum):
    """Lifecycle status for a catalog project."""

    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class Project(BaseModel):
    """Catalog project record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        """Update mutation timestamp, never moving it before creation."""
        self.updated_at = max(datetime.now(UTC), self.created_at)
