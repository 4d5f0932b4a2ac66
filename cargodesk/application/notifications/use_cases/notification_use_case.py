"""Notification inbox and staff-side notification management."""

from datetime import UTC, datetime
from typing import Any

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.notifications.protocols.notification_repository import (
    NotificationRepositoryProtocol,
)
from cargodesk.domain.common.value_objects.ids import NotificationId, UserId
from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationStatus,
    RecipientType,
)
from cargodesk.domain.notifications.exceptions import NotificationNotFoundError

logger = structlog.get_logger(__name__)

Recipient = tuple[RecipientType, int]


class NotificationUseCase:
    """
    Use case for notification operations.

    ``recipient`` limits an operation to one inbox; staff pass None to act
    on every notification.
    """

    def __init__(self, notification_repository: NotificationRepositoryProtocol) -> None:
        self.notification_repository = notification_repository

    def create_notification(
        self,
        notification_type: str,
        channel: NotificationChannel,
        recipient_type: RecipientType,
        recipient_id: int,
        title: str,
        message: str,
        created_by: int | None = None,
        recipient_email: str | None = None,
        recipient_phone: str | None = None,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        scheduled_at: datetime | None = None,
        data: dict[str, Any] | None = None,
        related_type: str | None = None,
        related_id: int | None = None,
    ) -> Notification:
        notification = Notification.create(
            notification_id=self.notification_repository.next_notification_number(
                datetime.now(UTC).date()
            ),
            notification_type=notification_type,
            channel=channel,
            recipient_type=recipient_type,
            recipient_id=recipient_id,
            title=title,
            message=message,
            recipient_email=recipient_email,
            recipient_phone=recipient_phone,
            priority=priority,
            scheduled_at=scheduled_at,
            data=data or {},
            related_type=related_type,
            related_id=related_id,
            created_by=UserId(created_by) if created_by else None,
        )
        notification = self.notification_repository.save(notification)

        logger.info(
            "notification_created",
            notification_id=notification.notification_id,
            channel=channel,
            recipient_type=recipient_type,
            recipient_id=recipient_id,
        )
        return notification

    def get_notification(self, notification_id: int, recipient: Recipient | None) -> Notification:
        """
        Raises:
            NotificationNotFoundError: If missing or addressed to someone else
        """
        notification = self.notification_repository.find_by_id(NotificationId(notification_id))
        if not notification or not self._addressed_to(notification, recipient):
            raise NotificationNotFoundError(notification_id)
        return notification

    def list_notifications(
        self,
        pagination: Pagination,
        recipient: Recipient | None,
        unread_only: bool = False,
        status: NotificationStatus | None = None,
        channel: NotificationChannel | None = None,
    ) -> PaginatedResult[Notification]:
        recipient_type, recipient_id = recipient if recipient else (None, None)
        items, total = self.notification_repository.search(
            pagination,
            recipient_type=recipient_type,
            recipient_id=recipient_id,
            status=status,
            channel=channel,
            unread_only=unread_only,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def unread_count(self, recipient: Recipient) -> int:
        return self.notification_repository.count_unread(*recipient)

    def mark_read(self, notification_id: int, recipient: Recipient | None) -> Notification:
        notification = self.get_notification(notification_id, recipient)
        if notification.mark_read():
            notification = self.notification_repository.save(notification)
            logger.info("notification_read", notification_id=notification.notification_id)
        return notification

    def mark_all_read(self, recipient: Recipient) -> int:
        """Returns the number of notifications that changed."""
        now = datetime.now(UTC)
        unread = self.notification_repository.find_unread(*recipient)
        for notification in unread:
            notification.mark_read(now)
        self.notification_repository.save_all(unread)

        logger.info(
            "notifications_marked_read",
            recipient_type=recipient[0],
            recipient_id=recipient[1],
            count=len(unread),
        )
        return len(unread)

    def delete_notification(self, notification_id: int, recipient: Recipient | None) -> None:
        notification = self.get_notification(notification_id, recipient)
        self.notification_repository.delete(notification)
        logger.info("notification_deleted", notification_id=notification.notification_id)

    @staticmethod
    def _addressed_to(notification: Notification, recipient: Recipient | None) -> bool:
        if recipient is None:
            return True
        return (notification.recipient_type, notification.recipient_id) == recipient
