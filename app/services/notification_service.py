"""
app/services/notification_service.py

Unread part notifications.
"""

from __future__ import annotations

import uuid

from db.models.notification import Notification
from db.repositories import NotificationRepository, PartRepository
from db.session import CatalogStore

DEFAULT_NOTIFICATION_LIMIT = 20


class NotificationService:
    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def list_unread(self, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> list[Notification]:
        with self._store.session() as session:
            return NotificationRepository(session).list_unread(limit=limit)

    def add_notification(
        self,
        *,
        part_id: uuid.UUID,
        type: str,
        message: str,
        price_before: float | None = None,
        price_after: float | None = None,
    ) -> Notification:
        with self._store.session() as session, session.begin():
            PartRepository(session).get_or_raise(part_id)
            return NotificationRepository(session).add(
                part_id=part_id,
                type=type,
                message=message,
                price_before=price_before,
                price_after=price_after,
            )

    def mark_read(self, notification_id: uuid.UUID) -> Notification:
        with self._store.session() as session, session.begin():
            return NotificationRepository(session).mark_read(notification_id)
