"""
tests/test_export_service.py

Pytest tests for the Excel export.
"""

from __future__ import annotations

from datetime import date

from openpyxl import load_workbook

from app.services.catalog_service import CatalogService
from app.services.export_service import EXPORT_COLUMNS, ExportService, export_filename
from db.session import CatalogStore


class TestExport:
    def test_filename(self) -> None:
        assert export_filename(date(2026, 10, 19)) == "부품목록_2026-10-19.xlsx"

    def test_workbook_layout(self, store: CatalogStore) -> None:
        catalog = CatalogService(store)
        catalog.add_part(partname="Bolt", vendor="Acme", price=1200, sap_code="S-1")
        catalog.add_part(partname="Nut", vendor="Beta", price=3.5)

        buffer, filename, count = ExportService(store).export_parts()

        assert count == 2
        assert filename.startswith("부품목록_")
        ws = load_workbook(buffer).active
        assert ws.title == "부품 목록"
        assert [cell.value for cell in ws[1]] == ["부품명", "공급업체", "단가 (₩)", "SAP 코드", "등록일"]
        assert ws[1][0].font.bold
        assert [ws.column_dimensions[letter].width for letter in "ABCDE"] == [width for _, width in EXPORT_COLUMNS]

        rows = {row[0]: row for row in ws.iter_rows(min_row=2, values_only=True)}
        assert rows["Bolt"][1:4] == ("Acme", 1200, "S-1")
        assert rows["Nut"][3] == "-"
        assert len(rows["Nut"][4]) == len("YYYY-MM-DD")

    def test_empty_catalog_has_header_only(self, store: CatalogStore) -> None:
        buffer, _, count = ExportService(store).export_parts()

        ws = load_workbook(buffer).active
        assert count == 0
        assert ws.max_row == 1
