"""
app/api/routers/notifications_router.py

Unread notification endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_notification_service
from app.api.errors import http_error_from_repository
from app.schemas.users import NotificationCreateRequest, NotificationResponse
from app.services.notification_service import DEFAULT_NOTIFICATION_LIMIT, NotificationService
from db.repositories.errors import CatalogRepositoryError

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
def list_notifications(
    limit: int = Query(default=DEFAULT_NOTIFICATION_LIMIT, ge=1, le=500),
    notifications: NotificationService = Depends(get_notification_service),
) -> list[NotificationResponse]:
    return [
        NotificationResponse.model_validate(notification)
        for notification in notifications.list_unread(limit=limit)
    ]


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
def create_notification(
    body: NotificationCreateRequest,
    notifications: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    try:
        notification = notifications.add_notification(**body.model_dump())
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return NotificationResponse.model_validate(notification)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_notification_read(
    notification_id: uuid.UUID,
    notifications: NotificationService = Depends(get_notification_service),
) -> NotificationResponse:
    try:
        notification = notifications.mark_read(notification_id)
    except CatalogRepositoryError as exc:
        raise http_error_from_repository(exc) from exc
    return NotificationResponse.model_validate(notification)
