"""Errors raised across the catalog service boundary."""

from __future__ import annotations


class CatalogError(Exception):
    """Base for every failure reported by `CatalogService`."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(CatalogError):
    """Client input failed validation; no state was changed."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ProjectNotFoundError(CatalogError):
    def __init__(self, project_id: str) -> None:
        super().__init__("Project not found")
        self.project_id = project_id


class StoreFailureError(CatalogError):
    """Storage could not complete the operation. Detail is logged, not exposed."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Catalog storage failed during {operation}")
        self.operation = operation
