"""
tests/test_row_validator.py

Pytest unit tests for row validation and intra-file duplicate tracking.
"""

from __future__ import annotations

import pytest

from app.mappers.column_mapper import MappingResolution
from app.validators.row_validator import (
    BLANK_SAP_CODE,
    CURRENCY_UNDETECTABLE,
    MISSING_PARTNAME,
    MISSING_VENDOR,
    DuplicateTracker,
    RowValidator,
    dedup_key,
    normalize_sap_code,
)


@pytest.fixture()
def validator() -> RowValidator:
    return RowValidator()


def _mapping(*fields: str) -> MappingResolution:
    return MappingResolution(
        canonical_to_source={field: field for field in fields},
        source_headers=tuple(fields),
        match_strategies={field: "override" for field in fields},
    )


# ---------------------------------------------------------------------------
# validate_row
# ---------------------------------------------------------------------------


class TestValidateRow:
    def test_complete_row_is_valid(self, validator: RowValidator) -> None:
        result = validator.validate_row(
            {"partname": "Bolt", "vendor": "Acme", "price": "$1.20", "sap_code": "S-1"},
            _mapping("partname", "vendor", "price", "sap_code"),
        )
        assert result.valid
        assert result.errors == []

    def test_errors_accumulate(self, validator: RowValidator) -> None:
        result = validator.validate_row(
            {"partname": "  ", "vendor": "", "price": "n/a"},
            _mapping("partname", "vendor", "price"),
        )
        assert not result.valid
        assert result.errors == [MISSING_PARTNAME, MISSING_VENDOR, CURRENCY_UNDETECTABLE]

    def test_whitespace_sap_code_is_blank(self, validator: RowValidator) -> None:
        result = validator.validate_row(
            {"partname": "Bolt", "vendor": "Acme", "price": "10", "sap_code": "   "},
            _mapping("partname", "vendor", "price", "sap_code"),
        )
        assert result.errors == [BLANK_SAP_CODE]

    def test_empty_sap_code_is_allowed(self, validator: RowValidator) -> None:
        result = validator.validate_row(
            {"partname": "Bolt", "vendor": "Acme", "price": "10", "sap_code": ""},
            _mapping("partname", "vendor", "price", "sap_code"),
        )
        assert result.valid

    def test_unmapped_sap_code_is_not_checked(self, validator: RowValidator) -> None:
        result = validator.validate_row(
            {"partname": "Bolt", "vendor": "Acme", "price": "10", "sap_code": "   "},
            _mapping("partname", "vendor", "price"),
        )
        assert result.valid

    def test_numeric_cells_are_accepted(self, validator: RowValidator) -> None:
        result = validator.validate_row({"partname": 1234, "vendor": "Acme", "price": 25000})
        assert result.valid


# ---------------------------------------------------------------------------
# DuplicateTracker
# ---------------------------------------------------------------------------


class TestDuplicateTracker:
    def test_first_occurrence_wins(self) -> None:
        tracker = DuplicateTracker()
        assert tracker.claim("Bolt", "S-1")
        assert not tracker.claim("Bolt", "S-1")
        assert len(tracker) == 1

    def test_same_name_different_code_is_distinct(self) -> None:
        tracker = DuplicateTracker()
        assert tracker.claim("Bolt", "S-1")
        assert tracker.claim("Bolt", "S-2")
        assert tracker.claim("Bolt", None)

    def test_blank_and_missing_code_share_a_key(self) -> None:
        assert dedup_key("Bolt", None) == dedup_key("Bolt", "") == "Bolt|"

    def test_normalize_sap_code(self) -> None:
        assert normalize_sap_code("  S-1 ") == "S-1"
        assert normalize_sap_code("   ") is None
        assert normalize_sap_code(None) is None
        assert normalize_sap_code(10001.0) == "10001"
