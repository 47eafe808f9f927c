"""Shared API dependency providers."""

from __future__ import annotations

from fastapi import Request

from aibuilder.config import Settings
from aibuilder.core.catalog import CatalogService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog
