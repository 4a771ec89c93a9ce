"""
Shared environment-driven database configuration helpers.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_DATABASE_URL = "sqlite:///data/parts.db"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = PROJECT_ROOT / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def ensure_sqlite_directory(url: str) -> None:
    """
    Create the parent directory of a file-backed SQLite database.

    In-memory URLs (``sqlite://`` or ``sqlite:///:memory:``) are left alone.
    """

    if not is_sqlite_url(url):
        return
    _, _, path = url.partition(":///")
    if not path or path.startswith(":memory:"):
        return
    Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)


def resolve_database_url() -> str:
    """
    Resolve database URL using environment variables and optional .env files.

    Priority:
    1) PARTS_DATABASE_URL
    2) DATABASE_URL
    3) the embedded SQLite file under data/
    """

    load_env_files()

    for name in ("PARTS_DATABASE_URL", "DATABASE_URL"):
        value = os.getenv(name, "").strip()
        if value:
            return value
    return DEFAULT_DATABASE_URL
