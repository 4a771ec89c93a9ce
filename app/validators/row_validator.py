"""
app/validators/row_validator.py

Row-level validation and intra-file duplicate detection for part imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from app.domain.catalog import CurrencyClassification, RowValidationResult
from app.mappers.currency_classifier import classify_currency

if TYPE_CHECKING:
    from app.mappers.column_mapper import MappingResolution

MISSING_PARTNAME = "partname is missing"
MISSING_VENDOR = "vendor is missing"
CURRENCY_UNDETECTABLE = "currency undetectable"
BLANK_SAP_CODE = "sap_code is blank"
DUPLICATE_IN_FILE = "duplicate within file (same partname/sap_code)"


def clean_text(value: Any) -> str:
    """
    Return a trimmed string for a raw cell; None and NaN become "".
    """

    if value is None:
        return ""
    if isinstance(value, float) and value != value:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def normalize_sap_code(value: Any) -> str | None:
    """
    Blank or missing SAP codes are stored as null.
    """

    cleaned = clean_text(value)
    return cleaned or None


def dedup_key(partname: Any, sap_code: Any) -> str:
    return f"{clean_text(partname)}|{normalize_sap_code(sap_code) or ''}"


class RowValidator:
    """
    Checks one mapped row; every rule runs and errors accumulate.
    """

    def validate_row(
        self,
        mapped: Mapping[str, Any],
        mapping: MappingResolution | None = None,
        *,
        classification: CurrencyClassification | None = None,
    ) -> RowValidationResult:
        errors: list[str] = []

        if not clean_text(mapped.get("partname")):
            errors.append(MISSING_PARTNAME)
        if not clean_text(mapped.get("vendor")):
            errors.append(MISSING_VENDOR)

        prices = classification or classify_currency(mapped.get("price"))
        if not prices.is_classified:
            errors.append(CURRENCY_UNDETECTABLE)

        sap_mapped = mapping.is_mapped("sap_code") if mapping is not None else "sap_code" in mapped
        if sap_mapped:
            raw_code = mapped.get("sap_code")
            if isinstance(raw_code, str) and raw_code != "" and not raw_code.strip():
                errors.append(BLANK_SAP_CODE)

        return RowValidationResult(valid=not errors, errors=errors)


class DuplicateTracker:
    """
    Remembers (partname, sap_code) keys seen in one file.

    The first occurrence claims the key; only rows that passed validation
    should be offered.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def claim(self, partname: Any, sap_code: Any) -> bool:
        """
        Return True when the key is new, False for a duplicate.
        """

        key = dedup_key(partname, sap_code)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __len__(self) -> int:
        return len(self._seen)
