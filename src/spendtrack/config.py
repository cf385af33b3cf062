"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .constants.categories import DEFAULT_CATEGORIES, CategorySet

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Split a comma separated environment variable, dropping blanks."""

    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(part.strip() for part in value.split(",") if part.strip())
    return items or default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "SpendTrack"
    DB_FILENAME = "spending.db"
    SQLITE_PRAGMAS = {"journal_mode": "wal", "foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("SPENDTRACK_DEV_MODE", default=True)
        self.LOG_LEVEL = os.getenv("SPENDTRACK_LOG_LEVEL", "INFO").upper()
        self.DATABASE_URL = os.getenv("SPENDTRACK_DATABASE_URL", self._build_sqlite_url())
        self.CATEGORIES = _env_list("SPENDTRACK_CATEGORIES", DEFAULT_CATEGORIES)
        if len(set(self.CATEGORIES)) != len(self.CATEGORIES):
            raise ValueError("SPENDTRACK_CATEGORIES must not contain duplicates.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("SPENDTRACK_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def category_set(self) -> CategorySet:
        """Return the closed category allow-list configured for this process."""

        return CategorySet(self.CATEGORIES)

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {"echo": False}
        if self.is_sqlite:
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration: verbose console logging regardless of environment."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.LOG_LEVEL = "DEBUG"
