"""
app/api/routers/imports_router.py

Spreadsheet (CSV/XLSX) preview and import endpoints.

POST /imports/preview   multipart ``file`` [+ ``mapping`` JSON]  -> ImportPreviewResponse
POST /imports           multipart ``file`` [+ ``mapping`` JSON]  -> BatchResultResponse (admin)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import (
    get_import_service,
    get_manual_mapping,
    get_sheet_upload,
    read_upload_bytes,
    require_admin,
)
from app.schemas.imports import BatchResultResponse, ImportPreviewResponse
from app.services.auth_service import AuthenticatedUser
from app.services.batch_reconciler import BatchTransactionError
from app.services.import_service import ImportService
from app.services.sheet_reader import SheetParseError
from app.validators.mapping_validator import ColumnMappingError

router = APIRouter(prefix="/imports", tags=["imports"])


@router.post("/preview", response_model=ImportPreviewResponse)
def preview_import(
    file: UploadFile = Depends(get_sheet_upload),
    mapping: dict[str, str] | None = Depends(get_manual_mapping),
    import_service: ImportService = Depends(get_import_service),
) -> ImportPreviewResponse:
    content = read_upload_bytes(file)
    try:
        preview = import_service.preview(
            content=content,
            filename=file.filename,
            manual_mapping=mapping,
        )
    except ColumnMappingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict()) from exc
    except SheetParseError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ImportPreviewResponse.model_validate(preview)


@router.post("", response_model=BatchResultResponse)
def import_sheet(
    file: UploadFile = Depends(get_sheet_upload),
    mapping: dict[str, str] | None = Depends(get_manual_mapping),
    import_service: ImportService = Depends(get_import_service),
    _admin: AuthenticatedUser = Depends(require_admin),
) -> BatchResultResponse:
    """
    Import every row of the uploaded sheet in one batch.
    """
    content = read_upload_bytes(file)
    try:
        result = import_service.import_file(
            content=content,
            filename=file.filename,
            manual_mapping=mapping,
        )
    except ColumnMappingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict()) from exc
    except SheetParseError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except BatchTransactionError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Import failed; nothing committed.",
        ) from exc
    return BatchResultResponse.model_validate(result)
