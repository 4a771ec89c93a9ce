"""
Repository layer exports.
"""

from db.repositories.category_repository import CategoryRepository
from db.repositories.errors import (
    CatalogRepositoryError,
    ConflictError,
    InvalidPartError,
    NotFoundError,
)
from db.repositories.history_repository import HistoryRepository
from db.repositories.notification_repository import NotificationRepository
from db.repositories.part_repository import PartRepository
from db.repositories.types import CategoryCount, PartFields, PriceChange, VendorCount
from db.repositories.user_repository import UserRepository

__all__ = [
    "CategoryRepository",
    "HistoryRepository",
    "NotificationRepository",
    "PartRepository",
    "UserRepository",
    "PartFields",
    "VendorCount",
    "CategoryCount",
    "PriceChange",
    "CatalogRepositoryError",
    "NotFoundError",
    "ConflictError",
    "InvalidPartError",
]
