"""
app/validators package marker.
"""

from app.validators.mapping_validator import ColumnMappingError, ColumnMappingValidator, MappingErrorDetail
from app.validators.row_validator import DuplicateTracker, RowValidator

__all__ = [
    "ColumnMappingError",
    "ColumnMappingValidator",
    "DuplicateTracker",
    "MappingErrorDetail",
    "RowValidator",
]
