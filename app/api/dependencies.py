"""
app/api/dependencies.py

Shared FastAPI dependencies: service wiring, upload validation and admin auth.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, File, Form, HTTPException, UploadFile, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.config import get_import_settings
from app.services.auth_service import AuthenticatedUser, AuthenticationError, AuthService
from app.services.catalog_service import CatalogService
from app.services.export_service import ExportService
from app.services.import_service import ImportService, build_import_service
from app.services.notification_service import NotificationService
from app.services.statistics_service import StatisticsService
from db.session import CatalogStore, get_store

SHEET_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
SHEET_EXTENSIONS = (".csv", ".xlsx")

admin_security = HTTPBasic(realm="parts-admin")


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


def get_catalog_service(store: CatalogStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)


def get_statistics_service(store: CatalogStore = Depends(get_store)) -> StatisticsService:
    return StatisticsService(store)


def get_notification_service(store: CatalogStore = Depends(get_store)) -> NotificationService:
    return NotificationService(store)


def get_export_service(store: CatalogStore = Depends(get_store)) -> ExportService:
    return ExportService(store)


def get_auth_service(store: CatalogStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


def get_import_service(store: CatalogStore = Depends(get_store)) -> ImportService:
    return build_import_service(store)


# ---------------------------------------------------------------------------
# Uploads
# ---------------------------------------------------------------------------


def get_sheet_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV or XLSX by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_sheet_filename = filename.endswith(SHEET_EXTENSIONS)
    is_sheet_content_type = content_type in SHEET_CONTENT_TYPES

    if not is_sheet_filename and not is_sheet_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV or XLSX files are allowed.",
        )

    return file


def read_upload_bytes(file: UploadFile) -> bytes:
    """
    Read the whole upload, enforcing the configured size limit.
    """

    limit = get_import_settings().max_upload_bytes
    try:
        file.file.seek(0)
        content = file.file.read(limit + 1)
    finally:
        file.file.close()

    if len(content) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Upload exceeds {limit} bytes.",
        )
    return content


def get_manual_mapping(mapping: str | None = Form(default=None)) -> dict[str, str] | None:
    """
    Parse the optional ``mapping`` form field: a JSON object of canonical field to header.
    """

    if mapping is None or not mapping.strip():
        return None
    try:
        parsed: Any = json.loads(mapping)
    except json.JSONDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="mapping must be a JSON object.",
        ) from exc
    if not isinstance(parsed, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in parsed.items()
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="mapping must map canonical field names to header strings.",
        )
    return parsed


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


def require_admin(
    credentials: HTTPBasicCredentials = Depends(admin_security),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Require HTTP Basic credentials of a user with the admin role.
    """

    try:
        return auth_service.verify_admin(
            username=credentials.username,
            password=credentials.password,
        )
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Basic"},
        ) from exc
