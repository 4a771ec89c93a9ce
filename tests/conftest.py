"""
tests/conftest.py

Shared fixtures: an in-memory catalog store with the schema created.
"""

from __future__ import annotations

import os

os.environ.setdefault("PARTS_LOG_FILE", "")
os.environ.setdefault("PARTS_DATABASE_URL", "sqlite://")

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402

from db.session import CatalogStore  # noqa: E402


@pytest.fixture()
def store() -> Iterator[CatalogStore]:
    """Fresh in-memory store per test; disposed afterwards."""
    catalog_store = CatalogStore("sqlite://").open()
    catalog_store.create_schema()
    try:
        yield catalog_store
    finally:
        catalog_store.close()
