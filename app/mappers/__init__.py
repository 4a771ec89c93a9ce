"""
app/mappers package marker.
"""

from app.mappers.column_mapper import (
    CANONICAL_FIELDS,
    REQUIRED_CANONICAL_FIELDS,
    ColumnMapper,
    MappingResolution,
)
from app.mappers.currency_classifier import classify_currency

__all__ = [
    "CANONICAL_FIELDS",
    "REQUIRED_CANONICAL_FIELDS",
    "ColumnMapper",
    "MappingResolution",
    "classify_currency",
]
