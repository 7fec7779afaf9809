"""Notification service.

Sending is simulated: the record is stored with ``sent`` set, overriding
whatever the caller supplied. No message leaves the process.
"""

from __future__ import annotations

from logging import getLogger

from account_opening.errors import InvalidArgumentError
from account_opening.models import Notification
from account_opening.repository import SqlAlchemyRepository
from account_opening.schemas import NotificationCreate

logger = getLogger(__name__)


class NotificationService:
    def __init__(self, repository: SqlAlchemyRepository[Notification]) -> None:
        self.repository = repository

    def send_notification(self, candidate: NotificationCreate | None) -> Notification:
        if candidate is None:
            raise InvalidArgumentError("Notification cannot be null")
        notification = Notification(
            recipient=candidate.recipient,
            message=candidate.message,
            type=candidate.type,
            sent=True,
        )
        notification = self.repository.save(notification)
        logger.info("Sent notification id=%s type=%s", notification.id, notification.type)
        return notification

    def list_notifications(self) -> list[Notification]:
        return self.repository.find_all()
