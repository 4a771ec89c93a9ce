"""
Repository for part notifications.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.notification import Notification
from db.repositories.errors import NotFoundError


class NotificationRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_unread(self, *, limit: int = 20) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.read_status.is_(False))
            .order_by(Notification.created_at.desc())
            .limit(max(1, limit))
        )
        return list(self._session.scalars(stmt).all())

    def add(
        self,
        *,
        part_id: uuid.UUID,
        type: str,
        message: str,
        price_before: float | None = None,
        price_after: float | None = None,
    ) -> Notification:
        notification = Notification(
            part_id=part_id,
            type=type,
            message=message,
            price_before=price_before,
            price_after=price_after,
        )
        self._session.add(notification)
        self._session.flush()
        return notification

    def mark_read(self, notification_id: uuid.UUID) -> Notification:
        notification = self._session.get(Notification, notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        notification.read_status = True
        self._session.flush()
        return notification
