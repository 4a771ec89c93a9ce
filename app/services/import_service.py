"""
app/services/import_service.py

Spreadsheet import workflow: read the sheet, map its columns, validate rows
and hand the fully materialized canonical rows to the batch reconciler.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app.config import get_import_settings
from app.domain.catalog import BatchResult, ImportPreview, ImportRow
from app.logging_utils import log_event
from app.mappers.column_mapper import REQUIRED_CANONICAL_FIELDS, ColumnMapper, MappingResolution
from app.services.batch_reconciler import BatchReconciler, resolve_prices
from app.services.sheet_reader import ParsedSheet, read_sheet
from app.validators.row_validator import (
    DUPLICATE_IN_FILE,
    DuplicateTracker,
    RowValidator,
    clean_text,
    normalize_sap_code,
)
from db.session import CatalogStore

logger = logging.getLogger(__name__)


class ImportService:
    """
    Coordinates preview and import of uploaded part sheets.
    """

    def __init__(
        self,
        store: CatalogStore,
        *,
        max_preview_rows: int,
        log_row_errors: bool,
        mapper: ColumnMapper | None = None,
        validator: RowValidator | None = None,
    ) -> None:
        self._max_preview_rows = max(1, max_preview_rows)
        self._mapper = mapper or ColumnMapper()
        self._validator = validator or RowValidator()
        self._reconciler = BatchReconciler(
            store,
            validator=self._validator,
            log_row_errors=log_row_errors,
        )

    def preview(
        self,
        *,
        content: bytes,
        filename: str | None,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> ImportPreview:
        """
        Suggest a column mapping and validate every row without writing anything.

        Without manual overrides an incomplete suggestion is not an error: the
        missing required fields are reported so the caller can pick columns.
        """

        sheet = read_sheet(content, filename)
        mapping = self._preview_mapping(sheet, manual_mapping)

        tracker = DuplicateTracker()
        rows: list[ImportRow] = []
        valid_rows = 0
        for index, raw_row in enumerate(sheet.rows):
            import_row = self._evaluate_row(index, raw_row, mapping, tracker)
            if import_row.valid:
                valid_rows += 1
            if len(rows) < self._max_preview_rows:
                rows.append(import_row)

        return ImportPreview(
            headers=list(sheet.headers),
            mapping=dict(mapping.canonical_to_source),
            match_strategies=dict(mapping.match_strategies),
            rows=rows,
            total_rows=sheet.row_count,
            valid_rows=valid_rows,
            invalid_rows=sheet.row_count - valid_rows,
            missing_fields=[field for field in REQUIRED_CANONICAL_FIELDS if not mapping.is_mapped(field)],
        )

    def import_file(
        self,
        *,
        content: bytes,
        filename: str | None,
        manual_mapping: Mapping[str, str] | None = None,
    ) -> BatchResult:
        """
        Map every row and reconcile the whole sheet in one batch.

        Raises ``ColumnMappingError`` when a required field cannot be mapped.
        """

        sheet = read_sheet(content, filename)
        mapping = self._mapper.resolve_mapping(sheet.headers, manual_overrides=manual_mapping)
        rows = [self._mapper.map_row(raw_row=raw_row, mapping=mapping) for raw_row in sheet.rows]

        log_event(
            logger,
            logging.INFO,
            "sheet_import_mapped",
            filename=filename,
            rows=len(rows),
            mapping=mapping.canonical_to_source,
        )
        return self._reconciler.bulk_import(rows)

    def bulk_import(self, rows: Any) -> BatchResult:
        return self._reconciler.bulk_import(rows)

    def _preview_mapping(
        self,
        sheet: ParsedSheet,
        manual_mapping: Mapping[str, str] | None,
    ) -> MappingResolution:
        if manual_mapping:
            return self._mapper.resolve_mapping(sheet.headers, manual_overrides=manual_mapping)

        suggested = self._mapper.suggest_mapping(sheet.headers)
        return MappingResolution(
            canonical_to_source=suggested,
            source_headers=tuple(sheet.headers),
            match_strategies={field: "alias_substring" for field in suggested},
        )

    def _evaluate_row(
        self,
        index: int,
        raw_row: dict[str, Any],
        mapping: MappingResolution,
        tracker: DuplicateTracker,
    ) -> ImportRow:
        mapped = self._mapper.map_row(raw_row=raw_row, mapping=mapping)
        prices = resolve_prices(mapped)
        validation = self._validator.validate_row(mapped, mapping, classification=prices)
        errors = list(validation.errors)
        if validation.valid and not tracker.claim(
            clean_text(mapped.get("partname")),
            normalize_sap_code(mapped.get("sap_code")),
        ):
            errors.append(DUPLICATE_IN_FILE)

        return ImportRow(
            index=index,
            raw=raw_row,
            mapped=mapped,
            price_usd=prices.price_usd,
            price_krw=prices.price_krw,
            category_name=clean_text(mapped.get("category")) or None,
            errors=errors,
        )


def build_import_service(store: CatalogStore) -> ImportService:
    """
    Build the import service for ``store`` with env-driven settings.
    """

    settings = get_import_settings()
    return ImportService(
        store,
        max_preview_rows=settings.max_preview_rows,
        log_row_errors=settings.log_row_errors,
    )
