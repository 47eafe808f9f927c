"""Common route helpers."""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from aibuilder.api.schemas.projects import ErrorResponse
from aibuilder.core.errors import CatalogError, InvalidInputError, ProjectNotFoundError

INVALID_JSON_MESSAGE = "Invalid JSON in request body"


class InvalidJSONBody(ValueError):
    pass


def failure(
    status_code: int,
    message: str,
    *,
    field: str | None = None,
    error: str | None = None,
) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(message=message, field=field, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def catalog_failure(exc: CatalogError, server_message: str) -> JSONResponse:
    """Map a catalog error to its HTTP envelope.

    Client errors keep their own message; server errors get `server_message`
    and a generic code so no internal detail leaks. The service has already
    logged the store error.
    """
    if isinstance(exc, InvalidInputError):
        return failure(status.HTTP_400_BAD_REQUEST, exc.message, field=exc.field)
    if isinstance(exc, ProjectNotFoundError):
        return failure(status.HTTP_404_NOT_FOUND, exc.message)
    return failure(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        server_message,
        error="store_failure",
    )


async def read_json_body(request: Request) -> Any:
    """Decode the request body, raising `InvalidJSONBody` on malformed input."""
    try:
        return await request.json()
    except ValueError as exc:
        raise InvalidJSONBody(INVALID_JSON_MESSAGE) from exc
