"""In-app notifications raised on behalf of other contexts."""

from datetime import UTC, datetime
from typing import Any

import structlog

from cargodesk.application.notifications.protocols.notification_repository import (
    NotificationRepositoryProtocol,
)
from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    RecipientType,
)

logger = structlog.get_logger(__name__)


class CustomerNotifier:
    """Creates in-app notifications addressed to a customer account."""

    def __init__(self, notification_repository: NotificationRepositoryProtocol) -> None:
        self.notification_repository = notification_repository

    def notify_customer(
        self,
        customer_id: int,
        notification_type: str,
        title: str,
        message: str,
        priority: NotificationPriority = NotificationPriority.MEDIUM,
        related_type: str | None = None,
        related_id: int | None = None,
        data: dict[str, Any] | None = None,
        created_by: int | None = None,
    ) -> Notification:
        """Queue an in-app notification. The dispatcher delivers it."""
        notification = Notification.create(
            notification_id=self.notification_repository.next_notification_number(
                datetime.now(UTC).date()
            ),
            notification_type=notification_type,
            channel=NotificationChannel.IN_APP,
            recipient_type=RecipientType.CUSTOMER,
            recipient_id=customer_id,
            title=title,
            message=message,
            priority=priority,
            related_type=related_type,
            related_id=related_id,
            data=data or {},
            created_by=UserId(created_by) if created_by else None,
        )
        notification = self.notification_repository.save(notification)

        logger.info(
            "customer_notified",
            notification_id=notification.notification_id,
            customer_id=customer_id,
            type=notification_type,
        )
        return notification
