"""
tests/test_batch_reconciler.py

Pytest tests for BatchReconciler against an in-memory SQLite store.

Coverage
--------
- Both documented end-to-end scenarios
- Idempotent re-import (update, no history when the price is unchanged)
- History invariant: one entry per price-changing update
- Totals invariant: inserted + updated + skipped == len(rows)
- Category resolution and preservation on update
- Null SAP code matching
- Per-row storage and unexpected failures isolated to that row
- Malformed input and outer transaction failure
"""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.services import batch_reconciler as reconciler_module
from app.services.batch_reconciler import (
    BatchReconciler,
    BatchTransactionError,
    MalformedBatchError,
)
from app.validators.row_validator import DUPLICATE_IN_FILE
from db.models.part import Part
from db.repositories import CategoryRepository, HistoryRepository, PartRepository
from db.session import CatalogStore


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def reconciler(store: CatalogStore) -> BatchReconciler:
    return BatchReconciler(store)


def _parts(store: CatalogStore) -> list[Part]:
    with store.session() as session:
        return PartRepository(session).list_parts()


def _only_part(store: CatalogStore) -> Part:
    parts = _parts(store)
    assert len(parts) == 1
    return parts[0]


def _history(store: CatalogStore, part: Part) -> list[Any]:
    with store.session() as session:
        return HistoryRepository(session).for_part(part.id)


def _add_category(store: CatalogStore, name: str) -> Any:
    with store.session() as session, session.begin():
        return CategoryRepository(session).add(name=name).id


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_duplicate_within_one_call_is_skipped(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        rows = [
            {"partname": "R1", "vendor": "AJA", "price": "1200원"},
            {"partname": "R1", "vendor": "AJA", "price": "1200원"},
        ]

        result = reconciler.bulk_import(rows)

        assert (result.inserted, result.updated, result.skipped) == (1, 0, 1)
        assert len(result.errors) == 1
        assert result.errors[0].index == 1
        assert result.errors[0].message == DUPLICATE_IN_FILE

        part = _only_part(store)
        assert part.price_krw == 1200.0
        assert part.price_usd is None
        assert part.price == 1200.0

    def test_price_change_across_calls_writes_history(
        self, store: CatalogStore, reconciler: BatchReconciler
    ) -> None:
        first = reconciler.bulk_import([{"partname": "C1", "vendor": "X", "price": "$5"}])
        second = reconciler.bulk_import([{"partname": "C1", "vendor": "X", "price": "$7"}])

        assert (first.inserted, first.updated, first.skipped) == (1, 0, 0)
        assert (second.inserted, second.updated, second.skipped) == (0, 1, 0)

        part = _only_part(store)
        assert part.price_usd == 7.0
        history = _history(store, part)
        assert len(history) == 1
        assert history[0].action == "update"
        assert history[0].price_before == 5.0
        assert history[0].price_after == 7.0


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


class TestInvariants:
    def test_reimport_is_idempotent(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        rows = [
            {"partname": "Bolt", "vendor": "Acme", "price": "$1.5", "sap_code": "S-1"},
            {"partname": "Nut", "vendor": "Acme", "price": "300원"},
        ]

        reconciler.bulk_import(rows)
        ids_before = {part.id for part in _parts(store)}
        result = reconciler.bulk_import(rows)

        assert (result.inserted, result.updated, result.skipped) == (0, 2, 0)
        assert {part.id for part in _parts(store)} == ids_before
        for part in _parts(store):
            assert _history(store, part) == []

    def test_totals_always_match_input_length(self, reconciler: BatchReconciler) -> None:
        rows: list[Any] = [
            {"partname": "A", "vendor": "V", "price": "10"},
            {"partname": "", "vendor": "V", "price": "10"},
            {"partname": "B", "vendor": "V", "price": "abc"},
            {"partname": "A", "vendor": "V", "price": "10"},
            "not a row",
            {"partname": "C", "vendor": "V", "price": "5000"},
        ]

        result = reconciler.bulk_import(rows)

        assert result.inserted + result.updated + result.skipped == len(rows)
        assert result.total == len(rows)
        assert result.skipped == len(result.errors) == 4
        assert all(error.message for error in result.errors)
        assert [error.index for error in result.errors] == [1, 2, 3, 4]

    def test_invalid_row_reports_every_reason(self, reconciler: BatchReconciler) -> None:
        result = reconciler.bulk_import([{"partname": " ", "vendor": "", "price": ""}])

        assert result.errors[0].message == "partname is missing; vendor is missing; currency undetectable"

    def test_invalid_row_does_not_claim_duplicate_key(self, reconciler: BatchReconciler) -> None:
        result = reconciler.bulk_import(
            [
                {"partname": "A", "vendor": "", "price": "10"},
                {"partname": "A", "vendor": "V", "price": "10"},
            ]
        )

        assert (result.inserted, result.skipped) == (1, 1)
        assert result.errors[0].index == 0

    def test_history_only_for_price_changes(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        reconciler.bulk_import([{"partname": "P", "vendor": "V", "price": "$1"}])
        reconciler.bulk_import([{"partname": "P", "vendor": "W", "price": "$1"}])
        reconciler.bulk_import([{"partname": "P", "vendor": "W", "price": "$2"}])
        reconciler.bulk_import([{"partname": "P", "vendor": "W", "price": "$3"}])

        part = _only_part(store)
        assert part.vendor == "W"
        history = _history(store, part)
        assert [(entry.price_before, entry.price_after) for entry in reversed(history)] == [(1.0, 2.0), (2.0, 3.0)]

    def test_empty_batch(self, reconciler: BatchReconciler) -> None:
        result = reconciler.bulk_import([])
        assert (result.inserted, result.updated, result.skipped, result.errors) == (0, 0, 0, [])


# ---------------------------------------------------------------------------
# Matching and categories
# ---------------------------------------------------------------------------


class TestMatching:
    def test_null_sap_code_only_matches_null(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        reconciler.bulk_import([{"partname": "Gear", "vendor": "V", "price": "10", "sap_code": "G-1"}])

        result = reconciler.bulk_import([{"partname": "Gear", "vendor": "V", "price": "12"}])
        assert result.inserted == 1

        result = reconciler.bulk_import([{"partname": "Gear", "vendor": "V", "price": "12", "sap_code": ""}])
        assert result.updated == 1
        assert len(_parts(store)) == 2

    def test_explicit_typed_price_is_used(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        reconciler.bulk_import([{"partname": "Cable", "vendor": "V", "price_krw": 50}])

        part = _only_part(store)
        assert part.price_krw == 50.0
        assert part.price_usd is None
        assert part.price == 50.0

    def test_source_id_column_is_ignored(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        reconciler.bulk_import([{"id": "legacy-1", "partname": "Pin", "vendor": "V", "price": "1"}])

        assert str(_only_part(store).id) != "legacy-1"

    def test_known_category_is_linked(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        category_id = _add_category(store, "Fasteners")

        reconciler.bulk_import([{"partname": "Bolt", "vendor": "V", "price": "1", "category": "Fasteners"}])

        part = _only_part(store)
        assert part.category_id == category_id
        assert part.category_name == "Fasteners"

    def test_unknown_category_keeps_raw_name(self, store: CatalogStore, reconciler: BatchReconciler) -> None:
        reconciler.bulk_import([{"partname": "Bolt", "vendor": "V", "price": "1", "category": "Misc"}])

        part = _only_part(store)
        assert part.category_id is None
        assert part.category_name_raw == "Misc"
        assert part.category_name == "Misc"
        with store.session() as session:
            assert CategoryRepository(session).list_categories() == []

    def test_update_without_category_preserves_link(
        self, store: CatalogStore, reconciler: BatchReconciler
    ) -> None:
        category_id = _add_category(store, "Fasteners")
        reconciler.bulk_import([{"partname": "Bolt", "vendor": "V", "price": "1", "category": "Fasteners"}])

        reconciler.bulk_import([{"partname": "Bolt", "vendor": "V", "price": "2"}])

        assert _only_part(store).category_id == category_id


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_storage_error_skips_only_that_row(
        self,
        store: CatalogStore,
        reconciler: BatchReconciler,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        original_insert = reconciler_module.PartRepository.insert_part

        def flaky_insert(self: PartRepository, fields: Any, **kwargs: Any) -> Any:
            if fields.partname == "Broken":
                raise SQLAlchemyError("disk I/O error")
            return original_insert(self, fields, **kwargs)

        monkeypatch.setattr(reconciler_module.PartRepository, "insert_part", flaky_insert)

        result = reconciler.bulk_import(
            [
                {"partname": "Good", "vendor": "V", "price": "1"},
                {"partname": "Broken", "vendor": "V", "price": "1"},
                {"partname": "Also good", "vendor": "V", "price": "1"},
            ]
        )

        assert (result.inserted, result.updated, result.skipped) == (2, 0, 1)
        assert result.errors[0].index == 1
        assert "disk I/O error" in result.errors[0].message
        assert {part.partname for part in _parts(store)} == {"Good", "Also good"}

    def test_unencodable_text_skips_only_that_row(
        self,
        store: CatalogStore,
        reconciler: BatchReconciler,
    ) -> None:
        result = reconciler.bulk_import(
            [
                {"partname": "Good", "vendor": "V", "price": "1"},
                {"partname": "Bad\ud800", "vendor": "V", "price": "1"},
                {"partname": "Good2", "vendor": "V", "price": "1"},
            ]
        )

        assert (result.inserted, result.skipped) == (2, 1)
        assert result.errors[0].index == 1
        assert {part.partname for part in _parts(store)} == {"Good", "Good2"}

    def test_unexpected_error_is_recorded_as_skip(
        self,
        store: CatalogStore,
        reconciler: BatchReconciler,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        reconciler.bulk_import([{"partname": "Bolt", "vendor": "V", "price": "1"}])

        def broken_append(self: HistoryRepository, *args: Any, **kwargs: Any) -> Any:
            raise RuntimeError("history unavailable")

        monkeypatch.setattr(reconciler_module.HistoryRepository, "append", broken_append)

        result = reconciler.bulk_import(
            [
                {"partname": "Bolt", "vendor": "V", "price": "2"},
                {"partname": "Nut", "vendor": "V", "price": "1"},
            ]
        )

        assert (result.inserted, result.updated, result.skipped) == (1, 0, 1)
        assert result.errors[0].index == 0
        assert result.errors[0].message == "processing error: history unavailable"
        prices = {part.partname: part.price for part in _parts(store)}
        assert prices == {"Bolt": 1.0, "Nut": 1.0}

    def test_non_list_input_is_malformed(self, reconciler: BatchReconciler) -> None:
        with pytest.raises(MalformedBatchError):
            reconciler.bulk_import({"partname": "A", "vendor": "V", "price": "1"})

    def test_outer_transaction_failure_raises(self) -> None:
        class _LockedSession:
            def __enter__(self) -> _LockedSession:
                return self

            def __exit__(self, *exc_info: Any) -> None:
                return None

            def begin(self) -> Any:
                raise OperationalError("BEGIN", {}, Exception("database is locked"))

        class _LockedStore:
            def session(self) -> _LockedSession:
                return _LockedSession()

        reconciler = BatchReconciler(_LockedStore())  # type: ignore[arg-type]

        with pytest.raises(BatchTransactionError):
            reconciler.bulk_import([{"partname": "A", "vendor": "V", "price": "1"}])
