"""
app/api/routers/parts_router.py

Part, history and bulk import endpoints.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from app.api.dependencies import get_catalog_service, get_import_service, require_admin
from app.api.errors import http_error_from_repository
from app.schemas.imports import BatchResultResponse
from app.schemas.parts import (
    HistoryEntryResponse,
    PartCategoryRequest,
    PartCreateRequest,
    PartResponse,
    PartWriteRequest,
)
from app.services.auth_service import AuthenticatedUser
from app.services.batch_reconciler import BatchTransactionError, MalformedBatchError
from app.services.catalog_service import CatalogService
from app.services.import_service import ImportService
from db.repositories.errors import CatalogRepositoryError

router = APIRouter(prefix="/parts", tags=["parts"])


@router.get("", response_model=list[PartResponse])
def list_parts(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[PartResponse]:
    return [PartResponse.model_validate(part) for part in catalog.list_parts()]


@router.get("/search", response_model=list[PartResponse])
def search_parts(
    q: str = Query(default="", description="Substring matched against name, vendor, SAP code and category"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[PartResponse]:
    return [PartResponse.model_validate(part) for part in catalog.search_parts(q)]


@router.post("", response_model=PartResponse, status_code=status.HTTP_201_CREATED)
def create_part(
    body: PartCreateRequest,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> PartResponse:
    try:
        part = catalog.add_part(**body.model_dump())
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return PartResponse.model_validate(part)


@router.post("/bulk", response_model=BatchResultResponse)
def bulk_import_parts(
    rows: list[dict[str, Any]] = Body(..., description="Rows keyed by canonical field name"),
    import_service: ImportService = Depends(get_import_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> BatchResultResponse:
    """
    Reconcile a JSON list of canonical rows in one transaction.

    Row-level problems are reported in ``errors``; only a failed outer
    transaction returns 500, in which case nothing was committed.
    """
    try:
        result = import_service.bulk_import(rows)
    except MalformedBatchError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except BatchTransactionError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Bulk import failed; nothing committed.",
        ) from exc
    return BatchResultResponse.model_validate(result)


@router.get("/{part_id}", response_model=PartResponse)
def get_part(
    part_id: uuid.UUID,
    catalog: CatalogService = Depends(get_catalog_service),
) -> PartResponse:
    try:
        return PartResponse.model_validate(catalog.get_part(part_id))
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc


@router.put("/{part_id}", response_model=PartResponse)
def update_part(
    part_id: uuid.UUID,
    body: PartWriteRequest,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> PartResponse:
    try:
        part = catalog.update_part(part_id, **body.model_dump())
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return PartResponse.model_validate(part)


@router.delete("/{part_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_part(
    part_id: uuid.UUID,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> Response:
    try:
        catalog.delete_part(part_id)
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{part_id}/category", response_model=PartResponse)
def update_part_category(
    part_id: uuid.UUID,
    body: PartCategoryRequest,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> PartResponse:
    try:
        part = catalog.update_part_category(part_id, body.category_id)
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return PartResponse.model_validate(part)


@router.get("/{part_id}/history", response_model=list[HistoryEntryResponse])
def get_part_history(
    part_id: uuid.UUID,
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[HistoryEntryResponse]:
    try:
        entries = catalog.get_history(part_id)
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return [HistoryEntryResponse.model_validate(entry) for entry in entries]
