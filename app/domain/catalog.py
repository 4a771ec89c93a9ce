"""
app/domain/catalog.py

Domain models used by the import and catalog flows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from db.repositories.types import CategoryCount, PriceChange, VendorCount


@dataclass(frozen=True)
class CurrencyClassification:
    """
    Classified price cell. At most one of the two amounts is set.
    """

    price_usd: float | None = None
    price_krw: float | None = None

    @property
    def is_classified(self) -> bool:
        return self.price_usd is not None or self.price_krw is not None

    @property
    def amount(self) -> float | None:
        return self.price_usd if self.price_usd is not None else self.price_krw


@dataclass(frozen=True)
class RowValidationResult:
    """
    Outcome of validating one mapped row.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class ImportRow:
    """
    One uploaded row plus its derived fields. Lives only for one import call.
    """

    index: int
    raw: dict[str, Any]
    mapped: dict[str, Any]
    price_usd: float | None = None
    price_krw: float | None = None
    category_name: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class BatchRowError:
    """
    Why one input row was skipped. ``index`` is the zero-based input position.
    """

    index: int
    message: str


@dataclass
class BatchResult:
    """
    Tally of one bulk import call.
    """

    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list[BatchRowError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.skipped

    def record_skip(self, index: int, message: str) -> None:
        self.skipped += 1
        self.errors.append(BatchRowError(index=index, message=message))


@dataclass(frozen=True)
class ImportPreview:
    """
    Mapping suggestion and per-row validation for an uploaded sheet.
    """

    headers: list[str]
    mapping: dict[str, str]
    match_strategies: dict[str, str]
    rows: list[ImportRow]
    total_rows: int
    valid_rows: int
    invalid_rows: int
    missing_fields: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PriceStatistics:
    min: float | None
    max: float | None
    avg: float | None


@dataclass(frozen=True)
class CatalogStatistics:
    """
    Aggregate view of the catalog at one point in time.
    """

    total_parts: int
    price_stats: PriceStatistics
    vendor_stats: list[VendorCount]
    category_stats: list[CategoryCount]
    recent_price_changes: list[PriceChange]
