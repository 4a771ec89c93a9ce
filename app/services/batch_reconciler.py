"""
app/services/batch_reconciler.py

Bulk import reconciliation for part rows.

One call opens one session and one outer transaction. Every row runs inside
its own SAVEPOINT, so a row that fails validation, hits a storage error or
raises anything else is rolled back alone and reported as a skip while the
rest of the batch goes on.
Only a failure to begin or commit the outer transaction aborts the call, in
which case nothing is committed.

Per row, in order:

    1. validate (name, vendor, currency, blank SAP code) and drop in-file duplicates
    2. resolve the category by exact name
    3. look up the part by (partname, sap_code)
    4. update it, appending a history entry when the price moved, or insert it
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.catalog import BatchResult, CurrencyClassification
from app.logging_utils import log_event
from app.mappers.currency_classifier import classify_currency
from app.validators.row_validator import (
    DUPLICATE_IN_FILE,
    DuplicateTracker,
    RowValidator,
    clean_text,
    normalize_sap_code,
)
from db.repositories import (
    CatalogRepositoryError,
    CategoryRepository,
    HistoryRepository,
    PartFields,
    PartRepository,
)
from db.session import CatalogStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MalformedBatchError(ValueError):
    """
    Raised when the batch payload is not a list of rows.
    """


class BatchTransactionError(RuntimeError):
    """
    Raised when the outer batch transaction cannot begin or commit.

    Nothing from the batch is persisted when this is raised.
    """


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------


class BatchReconciler:
    """
    Inserts or updates parts from canonical rows inside one transaction.
    """

    def __init__(
        self,
        store: CatalogStore,
        *,
        validator: RowValidator | None = None,
        log_row_errors: bool = True,
    ) -> None:
        self._store = store
        self._validator = validator or RowValidator()
        self._log_row_errors = log_row_errors

    def bulk_import(self, rows: Any) -> BatchResult:
        """
        Reconcile ``rows`` against the catalog and return the tally.

        ``rows`` must be a list of mappings keyed by canonical field name.
        ``inserted + updated + skipped`` always equals ``len(rows)``.
        """

        if not isinstance(rows, list):
            raise MalformedBatchError("Bulk import expects a list of rows.")

        result = BatchResult()
        if not rows:
            return result

        log_event(logger, logging.INFO, "bulk_import_started", rows=len(rows))
        tracker = DuplicateTracker()
        try:
            with self._store.session() as session, session.begin():
                for index, row in enumerate(rows):
                    try:
                        self._import_row(session, tracker, result, index, row)
                    except Exception as exc:
                        self._skip(result, index, f"processing error: {exc}")
        except SQLAlchemyError as exc:
            log_event(logger, logging.ERROR, "bulk_import_failed", rows=len(rows), error=str(exc))
            raise BatchTransactionError("Bulk import transaction failed; nothing was committed.") from exc

        log_event(
            logger,
            logging.INFO,
            "bulk_import_finished",
            rows=len(rows),
            inserted=result.inserted,
            updated=result.updated,
            skipped=result.skipped,
        )
        return result

    # ------------------------------------------------------------------
    # Row handling
    # ------------------------------------------------------------------

    def _import_row(
        self,
        session: Session,
        tracker: DuplicateTracker,
        result: BatchResult,
        index: int,
        row: Any,
    ) -> None:
        if not isinstance(row, Mapping):
            self._skip(result, index, "row is not an object")
            return

        prices = resolve_prices(row)
        validation = self._validator.validate_row(row, classification=prices)
        if not validation.valid:
            self._skip(result, index, "; ".join(validation.errors))
            return

        partname = clean_text(row.get("partname"))
        sap_code = normalize_sap_code(row.get("sap_code"))
        if not tracker.claim(partname, sap_code):
            self._skip(result, index, DUPLICATE_IN_FILE)
            return

        try:
            with session.begin_nested():
                is_update = self._reconcile(
                    session,
                    partname=partname,
                    vendor=clean_text(row.get("vendor")),
                    sap_code=sap_code,
                    category_name=clean_text(row.get("category")) or None,
                    prices=prices,
                )
        except (SQLAlchemyError, CatalogRepositoryError) as exc:
            self._skip(result, index, f"storage error: {exc}")
            return

        if is_update:
            result.updated += 1
        else:
            result.inserted += 1

    def _reconcile(
        self,
        session: Session,
        *,
        partname: str,
        vendor: str,
        sap_code: str | None,
        category_name: str | None,
        prices: CurrencyClassification,
    ) -> bool:
        """
        Write one validated row and return True when an existing part was updated.
        """

        parts = PartRepository(session)
        category_id = CategoryRepository(session).find_id_by_name(category_name) if category_name else None
        existing = parts.find_by_name_and_code(partname, sap_code)

        if existing is not None and category_name is None:
            category_id = existing.category_id
            category_name = existing.category_name_raw

        fields = PartFields(
            partname=partname,
            vendor=vendor,
            price=float(prices.amount),
            price_usd=prices.price_usd,
            price_krw=prices.price_krw,
            sap_code=sap_code,
            category_id=category_id,
            category_name_raw=category_name,
        )

        if existing is None:
            parts.insert_part(fields)
            return False

        price_before = existing.price
        parts.update_part(existing, fields)
        if price_before != fields.price:
            HistoryRepository(session).append(existing.id, price_before, fields.price)
        return True

    def _skip(self, result: BatchResult, index: int, message: str) -> None:
        result.record_skip(index, message)
        if self._log_row_errors:
            log_event(logger, logging.WARNING, "bulk_import_row_skipped", index=index, message=message)


def resolve_prices(row: Mapping[str, Any]) -> CurrencyClassification:
    """
    Use explicit ``price_usd``/``price_krw`` when exactly one is given,
    otherwise classify the raw ``price`` cell.
    """

    usd = _explicit_amount(row.get("price_usd"))
    krw = _explicit_amount(row.get("price_krw"))
    if usd is not None and krw is None:
        return CurrencyClassification(price_usd=usd)
    if krw is not None and usd is None:
        return CurrencyClassification(price_krw=krw)
    return classify_currency(row.get("price"))


def _explicit_amount(value: Any) -> float | None:
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) else None
