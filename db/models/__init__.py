"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.category import Category
from db.models.history import HistoryAction, HistoryEntry
from db.models.notification import Notification
from db.models.part import Part
from db.models.user import User, UserRole

__all__ = [
    "Category",
    "HistoryAction",
    "HistoryEntry",
    "Notification",
    "Part",
    "User",
    "UserRole",
]
