"""
app/services/export_service.py

Excel export of the parts catalog.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from io import BytesIO
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from app.logging_utils import log_event
from db.models.part import Part
from db.repositories import PartRepository
from db.session import CatalogStore

logger = logging.getLogger(__name__)

SHEET_TITLE = "부품 목록"
EXPORT_COLUMNS: tuple[tuple[str, int], ...] = (
    ("부품명", 20),
    ("공급업체", 15),
    ("단가 (₩)", 15),
    ("SAP 코드", 15),
    ("등록일", 12),
)
MISSING_SAP_CODE = "-"


def export_filename(today: date | None = None) -> str:
    return f"부품목록_{(today or date.today()).isoformat()}.xlsx"


def _format_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else ""


class ExportService:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def build_parts_workbook(self, parts: Sequence[Part]) -> BytesIO:
        """
        Write one sheet with a bold header row and one row per part.
        """

        wb = Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        bold_font = Font(bold=True)
        for position, (title, width) in enumerate(EXPORT_COLUMNS, start=1):
            cell = ws.cell(row=1, column=position, value=title)
            cell.font = bold_font
            ws.column_dimensions[cell.column_letter].width = width

        for row, part in enumerate(parts, start=2):
            ws.cell(row=row, column=1, value=part.partname)
            ws.cell(row=row, column=2, value=part.vendor)
            price_cell = ws.cell(row=row, column=3, value=part.price)
            price_cell.number_format = "#,##0.##"
            ws.cell(row=row, column=4, value=part.sap_code or MISSING_SAP_CODE)
            ws.cell(row=row, column=5, value=_format_date(part.created_at))

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output

    def export_parts(self) -> tuple[BytesIO, str, int]:
        """
        Build the workbook for the whole catalog.

        Returns the file buffer, the download file name and the part count.
        """

        with self._store.session() as session:
            parts = PartRepository(session).list_parts()
        workbook = self.build_parts_workbook(parts)
        filename = export_filename()
        log_event(logger, logging.INFO, "parts_exported", count=len(parts), filename=filename)
        return workbook, filename, len(parts)
