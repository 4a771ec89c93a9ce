"""
app/domain package marker.
"""

from app.domain.catalog import (
    BatchResult,
    BatchRowError,
    CatalogStatistics,
    CurrencyClassification,
    ImportPreview,
    ImportRow,
    PriceStatistics,
    RowValidationResult,
)

__all__ = [
    "BatchResult",
    "BatchRowError",
    "CatalogStatistics",
    "CurrencyClassification",
    "ImportPreview",
    "ImportRow",
    "PriceStatistics",
    "RowValidationResult",
]
