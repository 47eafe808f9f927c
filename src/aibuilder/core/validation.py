"""Input validation for catalog mutations.

Everything here is pure: payloads come in as decoded JSON, validated inputs
come out, and nothing touches storage.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from aibuilder.models.project import ProjectStatus

NAME_MESSAGE = "Project name is required and must be a non-empty string"
DESCRIPTION_MESSAGE = "Project description must be a string"
STATUS_MESSAGE = "Project status must be one of: " + ", ".join(
    member.value for member in ProjectStatus
)
BODY_MESSAGE = "Request body must be a JSON object"
EMPTY_UPDATE_MESSAGE = "No updatable fields supplied"


class ValidationError(ValueError):
    """Input rejected before reaching the store."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass(slots=True, frozen=True)
class ProjectDraft:
    """Validated input for project creation."""

    name: str
    description: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT


@dataclass(slots=True, frozen=True)
class ProjectChanges:
    """Validated partial update; `None` leaves a field untouched."""

    name: str | None = None
    description: str | None = None
    status: ProjectStatus | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.description is None and self.status is None

    def as_payload(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        if self.name is not None:
            payload["name"] = self.name
        if self.description is not None:
            payload["description"] = self.description
        if self.status is not None:
            payload["status"] = self.status.value
        return payload


def validate_create(payload: Any) -> ProjectDraft:
    """Check a create payload and return the normalized draft."""
    body = _require_object(payload)
    if "name" not in body:
        raise ValidationError("name", NAME_MESSAGE)
    name = _name(body["name"])
    description = _description(body.get("description"))
    status = _status(body.get("status"))
    return ProjectDraft(
        name=name,
        description=description or "",
        status=status or ProjectStatus.DRAFT,
    )


def validate_update(payload: Any) -> ProjectChanges:
    """Check a partial update payload.

    Only keys present in the payload are validated; at least one known field
    must be supplied.
    """
    body = _require_object(payload)
    changes = ProjectChanges(
        name=_name(body["name"]) if "name" in body else None,
        description=_description(body.get("description")),
        status=_status(body.get("status")),
    )
    if changes.is_empty:
        raise ValidationError("body", EMPTY_UPDATE_MESSAGE)
    return changes


def _require_object(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    raise ValidationError("body", BODY_MESSAGE)


def _name(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValidationError("name", NAME_MESSAGE)


def _description(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise ValidationError("description", DESCRIPTION_MESSAGE)


def _status(value: Any) -> ProjectStatus | None:
    if value is None:
        return None
    if isinstance(value, str):
        try:
            return ProjectStatus(value.strip().lower())
        except ValueError:
            pass
    raise ValidationError("status", STATUS_MESSAGE)
