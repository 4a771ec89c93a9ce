"""
app/api/routers/export_router.py

Excel download of the parts catalog.

GET /export/excel -> .xlsx attachment named 부품목록_<YYYY-MM-DD>.xlsx
"""

from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.api.dependencies import get_export_service
from app.services.export_service import ExportService

router = APIRouter(prefix="/export", tags=["export"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/excel")
def export_excel(
    export_service: ExportService = Depends(get_export_service),
) -> StreamingResponse:
    workbook, filename, count = export_service.export_parts()
    return StreamingResponse(
        workbook,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}",
            "X-Export-Count": str(count),
        },
    )
