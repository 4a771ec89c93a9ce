"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files, resolve_database_url

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Catalog store connection settings.
    """

    url: str
    echo: bool = False
    auto_create_schema: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    """
    Root logger level and the append-only log file.
    """

    level: str = "INFO"
    log_file: str | None = "data/parts-viewer.log"


@dataclass(frozen=True)
class ImportSettings:
    """
    Runtime settings for spreadsheet import.
    """

    max_preview_rows: int = 500
    log_row_errors: bool = True
    max_upload_bytes: int = 10 * 1024 * 1024


@dataclass(frozen=True)
class AdminSettings:
    """
    Optional bootstrap admin account created at startup when absent.
    """

    username: str | None = None
    password: str | None = None

    @property
    def bootstrap_enabled(self) -> bool:
        return bool(self.username and self.password)


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    """
    Return cached database settings from environment variables.
    """

    _load_env_once()
    return DatabaseSettings(
        url=resolve_database_url(),
        echo=_get_bool_env("SQL_ECHO", False),
        auto_create_schema=_get_bool_env("PARTS_AUTO_CREATE_SCHEMA", True),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """
    Return cached logging settings. An empty PARTS_LOG_FILE disables the file handler.
    """

    level = _get_str_env("LOG_LEVEL", "INFO").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        level = "INFO"
    log_file = os.getenv("PARTS_LOG_FILE")
    if log_file is None:
        resolved_file: str | None = "data/parts-viewer.log"
    else:
        resolved_file = log_file.strip() or None
    return LoggingSettings(level=level, log_file=resolved_file)


@lru_cache(maxsize=1)
def get_import_settings() -> ImportSettings:
    """
    Return cached import settings from environment variables.
    """

    return ImportSettings(
        max_preview_rows=max(1, _get_int_env("PARTS_IMPORT_MAX_PREVIEW_ROWS", 500)),
        log_row_errors=_get_bool_env("PARTS_IMPORT_LOG_ROW_ERRORS", True),
        max_upload_bytes=max(1024, _get_int_env("PARTS_IMPORT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
    )


@lru_cache(maxsize=1)
def get_admin_settings() -> AdminSettings:
    """
    Return the bootstrap admin credentials, if configured.
    """

    return AdminSettings(
        username=_get_optional_str_env("PARTS_ADMIN_USERNAME"),
        password=_get_optional_str_env("PARTS_ADMIN_PASSWORD"),
    )
