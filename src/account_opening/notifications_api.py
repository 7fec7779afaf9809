"""Notification service routes: /api/notifications."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy.orm import Session

from account_opening.db import session_scope
from account_opening.errors import ValidationFailure
from account_opening.repository import notification_repository
from account_opening.schemas import NotificationCreate, NotificationResponse
from account_opening.services import NotificationService
from account_opening.validation import validate_notification

notifications_router = APIRouter(prefix="/api/notifications", tags=["notifications"])


def _service(session: Session) -> NotificationService:
    return NotificationService(notification_repository(session))


@notifications_router.post("", response_model=NotificationResponse)
def send_notification(body: NotificationCreate) -> NotificationResponse:
    """Send (simulated) a notification. The stored record always has sent=true."""
    violations = validate_notification(body)
    if violations:
        raise ValidationFailure(violations)
    with session_scope() as session:
        return NotificationResponse.model_validate(_service(session).send_notification(body))


@notifications_router.get("", response_model=list[NotificationResponse])
def list_notifications() -> list[NotificationResponse]:
    with session_scope() as session:
        return [
            NotificationResponse.model_validate(n) for n in _service(session).list_notifications()
        ]
