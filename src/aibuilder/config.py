"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from aibuilder.db.base import DEFAULT_TIMEOUT_SECONDS, ProjectStore
from aibuilder.db.memory import MemoryStore
from aibuilder.db.store import SQLiteStore

STORE_BACKENDS = ("sqlite", "memory")
DEFAULT_DB_PATH = ".aibuilder/catalog.db"


@dataclass(frozen=True, slots=True)
class Settings:
    store_backend: str = "sqlite"
    db_path: Path = Path(DEFAULT_DB_PATH)
    store_timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


def _env(name: str, default: str = "") -> str:
    return str(os.getenv(name, default)).strip()


def _env_float(name: str, default: float) -> float:
    try:
        value = float(_env(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)))
    except ValueError:
        return default


def get_settings() -> Settings:
    backend = _env("AIBUILDER_STORE", "sqlite").lower()
    if backend not in STORE_BACKENDS:
        backend = "sqlite"

    return Settings(
        store_backend=backend,
        db_path=Path(_env("AIBUILDER_DB_PATH", DEFAULT_DB_PATH) or DEFAULT_DB_PATH),
        store_timeout=_env_float("AIBUILDER_STORE_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        log_level=_env("AIBUILDER_LOG_LEVEL", "INFO").upper() or "INFO",
        host=_env("AIBUILDER_HOST", "0.0.0.0") or "0.0.0.0",
        port=_env_int("AIBUILDER_PORT", 8000),
    )


def build_store(settings: Settings) -> ProjectStore:
    if settings.store_backend == "memory":
        return MemoryStore(timeout=settings.store_timeout)
    return SQLiteStore(settings.db_path, timeout=settings.store_timeout)
