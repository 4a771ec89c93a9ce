"""
app/api/routers package marker.
"""

from app.api.routers.categories_router import router as categories_router
from app.api.routers.export_router import router as export_router
from app.api.routers.imports_router import router as imports_router
from app.api.routers.notifications_router import router as notifications_router
from app.api.routers.parts_router import router as parts_router
from app.api.routers.statistics_router import router as statistics_router
from app.api.routers.users_router import router as users_router

__all__ = [
    "categories_router",
    "export_router",
    "imports_router",
    "notifications_router",
    "parts_router",
    "statistics_router",
    "users_router",
]
