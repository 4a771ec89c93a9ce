"""
app/schemas package marker.
"""

from app.schemas.imports import BatchResultResponse, ImportPreviewResponse
from app.schemas.parts import CategoryResponse, HistoryEntryResponse, PartResponse
from app.schemas.statistics import StatisticsResponse
from app.schemas.users import NotificationResponse, UserResponse

__all__ = [
    "BatchResultResponse",
    "CategoryResponse",
    "HistoryEntryResponse",
    "ImportPreviewResponse",
    "NotificationResponse",
    "PartResponse",
    "StatisticsResponse",
    "UserResponse",
]
