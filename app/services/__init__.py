"""
app/services package marker.
"""

from app.services.auth_service import AuthenticationError, AuthService
from app.services.batch_reconciler import BatchReconciler, BatchTransactionError, MalformedBatchError
from app.services.catalog_service import CatalogService
from app.services.export_service import ExportService
from app.services.import_service import ImportService, build_import_service
from app.services.notification_service import NotificationService
from app.services.sheet_reader import SheetParseError, read_sheet
from app.services.statistics_service import StatisticsService

__all__ = [
    "AuthService",
    "AuthenticationError",
    "BatchReconciler",
    "BatchTransactionError",
    "MalformedBatchError",
    "CatalogService",
    "ExportService",
    "ImportService",
    "build_import_service",
    "NotificationService",
    "SheetParseError",
    "read_sheet",
    "StatisticsService",
]
