"""FastAPI app entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import Depends, FastAPI

from aibuilder.api.deps import get_settings as settings_dependency
from aibuilder.api.routes.projects import router as projects_router
from aibuilder.config import Settings, build_store, get_settings
from aibuilder.core.catalog import CatalogService
from aibuilder.logging_setup import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings if settings is not None else get_settings()
    app = FastAPI(title="AI Builder Catalog API", version="0.1.0")
    app.state.settings = settings
    app.state.catalog = CatalogService(build_store(settings))
    app.include_router(projects_router)

    @app.get("/api/health", tags=["system"])
    async def health(current: Settings = Depends(settings_dependency)) -> dict[str, str]:
        return {"status": "ok", "store": current.store_backend}

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, reload=False)
