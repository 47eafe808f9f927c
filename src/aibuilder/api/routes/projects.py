"""Project routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from aibuilder.api.deps import get_catalog_service
from aibuilder.api.routes.common import (
    INVALID_JSON_MESSAGE,
    InvalidJSONBody,
    catalog_failure,
    failure,
    read_json_body,
)
from aibuilder.api.schemas.projects import (
    ErrorResponse,
    ProjectEventsResponse,
    ProjectResponse,
    ProjectsResponse,
)
from aibuilder.core.catalog import CatalogService
from aibuilder.core.errors import CatalogError

router = APIRouter(prefix="/api/projects", tags=["projects"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


@router.get("", response_model=ProjectsResponse, responses=_ERRORS)
async def list_projects(
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectsResponse | JSONResponse:
    try:
        projects = await catalog.list_projects()
    except CatalogError as exc:
        return catalog_failure(exc, "Failed to fetch projects")
    return ProjectsResponse(data=projects, message="Projects retrieved successfully")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectResponse,
    responses=_ERRORS,
)
async def create_project(
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectResponse | JSONResponse:
    try:
        payload = await read_json_body(request)
    except InvalidJSONBody:
        return failure(status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
    try:
        project = await catalog.create_project(payload)
    except CatalogError as exc:
        return catalog_failure(exc, "Failed to create project")
    return ProjectResponse(data=project, message="Project created successfully")


@router.get("/{project_id}", response_model=ProjectResponse, responses=_ERRORS)
async def get_project(
    project_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectResponse | JSONResponse:
    try:
        project = await catalog.get_project(project_id)
    except CatalogError as exc:
        return catalog_failure(exc, "Failed to fetch project")
    return ProjectResponse(data=project, message="Project retrieved successfully")


@router.patch("/{project_id}", response_model=ProjectResponse, responses=_ERRORS)
async def update_project(
    project_id: str,
    request: Request,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectResponse | JSONResponse:
    try:
        payload = await read_json_body(request)
    except InvalidJSONBody:
        return failure(status.HTTP_400_BAD_REQUEST, INVALID_JSON_MESSAGE)
    try:
        project = await catalog.update_project(project_id, payload)
    except CatalogError as exc:
        return catalog_failure(exc, "Failed to update project")
    return ProjectResponse(data=project, message="Project updated successfully")


@router.get("/{project_id}/events", response_model=ProjectEventsResponse, responses=_ERRORS)
async def list_project_events(
    project_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProjectEventsResponse | JSONResponse:
    try:
        events = await catalog.list_project_events(project_id)
    except CatalogError as exc:
        return catalog_failure(exc, "Failed to fetch project events")
    return ProjectEventsResponse(data=events, message="Project events retrieved successfully")
