"""
app/api/errors.py

Mapping from repository exceptions to HTTP errors.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from db.repositories.errors import (
    CatalogRepositoryError,
    ConflictError,
    InvalidPartError,
    NotFoundError,
)

_STATUS_BY_ERROR: tuple[tuple[type[CatalogRepositoryError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidPartError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def http_error_from_repository(exc: CatalogRepositoryError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.to_dict())
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.to_dict())
