"""
app/mappers/column_mapper.py

Maps arbitrary spreadsheet headers onto canonical part fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from app.validators.mapping_validator import ColumnMappingError, ColumnMappingValidator, MappingErrorDetail

CANONICAL_FIELDS: tuple[str, ...] = (
    "partname",
    "vendor",
    "price",
    "sap_code",
    "category",
    "id",
)

REQUIRED_CANONICAL_FIELDS: tuple[str, ...] = (
    "partname",
    "vendor",
    "price",
)

# Candidates are tried in order; the first header containing one wins.
DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "partname": ("partname", "part_name", "name", "부품명"),
    "vendor": ("vendor", "supplier", "공급업체", "업체"),
    "price": ("price", "unit_price", "cost", "단가", "가격", "원화", "달러", "원", "$"),
    "sap_code": ("sap_code", "sap", "code", "SAP코드"),
    "category": ("category", "cat", "type", "카테고리", "분류"),
    "id": ("id", "part_id"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class MappingResolution:
    """
    Final resolved mapping metadata.
    """

    canonical_to_source: dict[str, str]
    source_headers: tuple[str, ...]
    match_strategies: dict[str, str]

    def is_mapped(self, canonical_field: str) -> bool:
        return canonical_field in self.canonical_to_source

    def source_for(self, canonical_field: str) -> str | None:
        return self.canonical_to_source.get(canonical_field)


class ColumnMapper:
    """
    Resolves uploaded sheet headers into canonical field mappings.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        validator: ColumnMappingValidator | None = None,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in (aliases or DEFAULT_COLUMN_ALIASES).items()
        }
        self._validator = validator or ColumnMappingValidator(
            required_fields=REQUIRED_CANONICAL_FIELDS,
            canonical_fields=CANONICAL_FIELDS,
        )

    def suggest_mapping(self, headers: Sequence[str]) -> dict[str, str]:
        """
        Auto-suggest a header for every canonical field by substring match.

        Unmatched fields are left out; nothing is validated here.
        """

        source_headers = self._clean_headers(headers)
        suggested: dict[str, str] = {}
        used_headers: set[str] = set()
        for canonical_field in CANONICAL_FIELDS:
            match = self._find_substring_match(
                canonical_field=canonical_field,
                source_headers=source_headers,
                used_headers=used_headers,
            )
            if match is not None:
                suggested[canonical_field] = match
                used_headers.add(match)
        return suggested

    def resolve_mapping(
        self,
        headers: Sequence[str],
        *,
        manual_overrides: Mapping[str, str] | None = None,
    ) -> MappingResolution:
        """
        Resolve canonical-to-source mapping from headers and user overrides.

        Overrides win; remaining fields fall back to the substring suggestion.
        """

        source_headers = self._clean_headers(headers)
        if not source_headers:
            raise ColumnMappingError(
                message="Sheet headers are empty; cannot resolve column mapping.",
                errors=[
                    MappingErrorDetail(
                        code="empty_headers",
                        message="No sheet headers were provided.",
                    )
                ],
            )

        header_lookup: dict[str, str] = {header: header for header in source_headers}
        normalized_header_lookup: dict[str, str] = {}
        for header in source_headers:
            normalized = normalize_header(header)
            if normalized and normalized not in normalized_header_lookup:
                normalized_header_lookup[normalized] = header

        resolved: dict[str, str] = {}
        strategies: dict[str, str] = {}
        mapping_errors: list[MappingErrorDetail] = []

        for canonical_field, source_column in self._clean_overrides(manual_overrides).items():
            if canonical_field not in CANONICAL_FIELDS:
                mapping_errors.append(
                    MappingErrorDetail(
                        code="invalid_override_field",
                        message="Manual override contains unknown canonical field.",
                        canonical_field=canonical_field,
                        source_column=source_column,
                    )
                )
                continue

            matched_source = header_lookup.get(source_column) or normalized_header_lookup.get(
                normalize_header(source_column)
            )
            if matched_source is None:
                mapping_errors.append(
                    MappingErrorDetail(
                        code="override_source_not_found",
                        message="Manual override points to a column not present in the sheet headers.",
                        canonical_field=canonical_field,
                        source_column=source_column,
                        context={"source_headers": list(source_headers)},
                    )
                )
                continue

            resolved[canonical_field] = matched_source
            strategies[canonical_field] = "override"

        used_headers = set(resolved.values())
        for canonical_field in CANONICAL_FIELDS:
            if canonical_field in resolved:
                continue
            match = self._find_substring_match(
                canonical_field=canonical_field,
                source_headers=source_headers,
                used_headers=used_headers,
            )
            if match is not None:
                resolved[canonical_field] = match
                strategies[canonical_field] = "alias_substring"
                used_headers.add(match)

        self._validator.validate(
            mapping=resolved,
            source_headers=source_headers,
            pre_errors=mapping_errors,
        )

        return MappingResolution(
            canonical_to_source=resolved,
            source_headers=source_headers,
            match_strategies=strategies,
        )

    def map_row(
        self,
        *,
        raw_row: Mapping[str, Any],
        mapping: MappingResolution,
    ) -> dict[str, Any]:
        """
        Map one source row into canonical raw field values.
        """

        return {
            canonical_field: raw_row.get(source_column)
            for canonical_field, source_column in mapping.canonical_to_source.items()
        }

    def _find_substring_match(
        self,
        *,
        canonical_field: str,
        source_headers: Sequence[str],
        used_headers: set[str],
    ) -> str | None:
        lowered = [(header, header.lower()) for header in source_headers if header not in used_headers]
        for candidate in self._aliases.get(canonical_field, ()):
            needle = candidate.lower()
            for header, header_lower in lowered:
                if needle in header_lower:
                    return header
        return None

    @staticmethod
    def _clean_headers(headers: Sequence[str]) -> tuple[str, ...]:
        return tuple(str(header) for header in headers if header is not None and str(header).strip())

    @staticmethod
    def _clean_overrides(manual_overrides: Mapping[str, str] | None) -> dict[str, str]:
        cleaned: dict[str, str] = {}
        if not manual_overrides:
            return cleaned
        for key, value in manual_overrides.items():
            if isinstance(key, str) and isinstance(value, str) and key.strip() and value.strip():
                cleaned[key.strip()] = value.strip()
        return cleaned
