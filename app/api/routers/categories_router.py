"""
app/api/routers/categories_router.py

Category endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import get_catalog_service, require_admin
from app.api.errors import http_error_from_repository
from app.schemas.parts import CategoryCreateRequest, CategoryResponse
from app.services.auth_service import AuthenticatedUser
from app.services.catalog_service import CatalogService
from db.repositories.errors import CatalogRepositoryError

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    catalog: CatalogService = Depends(get_catalog_service),
) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(category) for category in catalog.list_categories()]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreateRequest,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> CategoryResponse:
    """
    Create a category. Raises HTTP 409 if the name is already taken.
    """
    try:
        category = catalog.add_category(
            name=body.name,
            description=body.description,
            color=body.color,
        )
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: uuid.UUID,
    catalog: CatalogService = Depends(get_catalog_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> Response:
    try:
        catalog.delete_category(category_id)
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
