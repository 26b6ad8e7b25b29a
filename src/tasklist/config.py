# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per process, built once by the entrypoint and passed down.
- No module-level settings singleton: tests build their own.
- The data directory is user-scoped; failing to resolve it is fatal at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKLIST"
APP_SLUG = "tasklist"
TASKS_FILENAME = "todos.json"


class StorageLocationError(RuntimeError):
    """The user-scoped data location cannot be determined."""


class StorageBackend(StrEnum):
    FILE = "file"
    MEMORY = "memory"

    @classmethod
    def from_env(cls, raw: str | None) -> StorageBackend:
        if not raw or not raw.strip():
            return cls.FILE
        return cls(raw.strip().lower())


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir() -> Path:
    """
    Per-user data directory: ~/.local/share/tasklist.

    Raises StorageLocationError when the home directory cannot be resolved.
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise StorageLocationError("Could not find the user's home directory") from e
    return home / ".local" / "share" / APP_SLUG


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Storage ----
    storage_backend: StorageBackend
    data_dir: Path
    tasks_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), APP_SLUG).strip() or APP_SLUG
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)

        raw_backend = _env(_k("STORAGE"), StorageBackend.FILE.value)
        try:
            storage_backend = StorageBackend.from_env(raw_backend)
        except ValueError as e:
            raise ValueError(f"Unknown storage backend: {raw_backend!r}") from e

        data_dir = _env_path(_k("DATA_DIR"), None) or default_data_dir()
        tasks_path = _env_path(_k("TASKS_FILE"), None) or data_dir / TASKS_FILENAME

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            storage_backend=storage_backend,
            data_dir=data_dir,
            tasks_path=tasks_path,
        )


def get_settings() -> Settings:
    """Load .env (never overriding real env vars) and build Settings."""
    load_dotenv(override=False)
    return Settings.from_env()
