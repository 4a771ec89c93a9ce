"""
app/validators/mapping_validator.py

Checks a resolved part-column mapping before any row is read through it.

A usable mapping names a sheet column for partname, vendor and price, only
uses canonical part fields, points at columns that exist in the sheet, and
never reads two part fields out of the same column.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    One problem found in a part-column mapping.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "canonical_field": self.canonical_field,
            "source_column": self.source_column,
            "context": self.context,
        }


class ColumnMappingError(ValueError):
    """
    Raised when sheet columns cannot be mapped onto part fields.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }


class ColumnMappingValidator:
    """
    Validates a canonical-field to sheet-column mapping for part rows.
    """

    def __init__(
        self,
        *,
        required_fields: Sequence[str],
        canonical_fields: Sequence[str],
    ) -> None:
        self._required_fields = tuple(required_fields)
        self._canonical_fields = frozenset(canonical_fields)

    def unmapped_required(self, mapping: Mapping[str, str]) -> list[str]:
        return [field for field in self._required_fields if field not in mapping]

    def validate(
        self,
        *,
        mapping: Mapping[str, str],
        source_headers: Sequence[str],
        pre_errors: Sequence[MappingErrorDetail] | None = None,
    ) -> None:
        """
        Raise ``ColumnMappingError`` listing every problem with ``mapping``.
        """

        errors: list[MappingErrorDetail] = list(pre_errors or [])
        errors.extend(self._unknown_fields(mapping))
        errors.extend(self._absent_columns(mapping, source_headers))
        errors.extend(self._shared_columns(mapping))
        unmapped = self.unmapped_required(mapping)
        for field in unmapped:
            errors.append(
                MappingErrorDetail(
                    code="required_field_unmapped",
                    message=f"No sheet column is mapped to the required part field '{field}'.",
                    canonical_field=field,
                    context={"source_headers": list(source_headers)},
                )
            )

        if not errors:
            return

        message = "Part columns could not be mapped."
        if unmapped:
            message += f" Unmapped required fields: {', '.join(sorted(unmapped))}."
        raise ColumnMappingError(message=message, errors=errors)

    def _unknown_fields(self, mapping: Mapping[str, str]) -> list[MappingErrorDetail]:
        return [
            MappingErrorDetail(
                code="invalid_canonical_field",
                message="Mapping names a field that parts do not have.",
                canonical_field=field,
                source_column=column,
            )
            for field, column in mapping.items()
            if field not in self._canonical_fields
        ]

    @staticmethod
    def _absent_columns(
        mapping: Mapping[str, str],
        source_headers: Sequence[str],
    ) -> list[MappingErrorDetail]:
        present = set(source_headers)
        return [
            MappingErrorDetail(
                code="unknown_source_column",
                message="Mapped column does not exist in the sheet headers.",
                canonical_field=field,
                source_column=column,
            )
            for field, column in mapping.items()
            if column not in present
        ]

    @staticmethod
    def _shared_columns(mapping: Mapping[str, str]) -> list[MappingErrorDetail]:
        fields_by_column: dict[str, list[str]] = defaultdict(list)
        for field, column in mapping.items():
            fields_by_column[column].append(field)

        return [
            MappingErrorDetail(
                code="shared_source_column",
                message="One sheet column is mapped to more than one part field.",
                source_column=column,
                context={"canonical_fields": sorted(fields)},
            )
            for column, fields in fields_by_column.items()
            if len(fields) > 1
        ]
