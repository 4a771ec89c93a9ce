"""
Repository-layer exceptions for catalog persistence.
"""

from __future__ import annotations

from typing import Any


class CatalogRepositoryError(Exception):
    """Base exception for catalog repository failures."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "details": self.details}


class NotFoundError(CatalogRepositoryError):
    """Raised when a referenced part, category, user or notification does not exist."""

    def __init__(self, resource: str, identifier: object) -> None:
        super().__init__(f"{resource} not found.", details={"id": str(identifier)})
        self.resource = resource


class ConflictError(CatalogRepositoryError):
    """Raised when a unique value (category name, username) is already taken."""


class InvalidPartError(CatalogRepositoryError):
    """Raised when part fields break the name/vendor/price invariants."""
