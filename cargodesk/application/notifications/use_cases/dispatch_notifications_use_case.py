"""Use case that hands due notifications to their channels."""

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog

from cargodesk.application.notifications.protocols.notification_repository import (
    NotificationRepositoryProtocol,
)
from cargodesk.application.notifications.protocols.notification_sender import (
    NotificationSenderProtocol,
)
from cargodesk.domain.notifications.exceptions import NotificationDeliveryError

logger = structlog.get_logger(__name__)

DEFAULT_BATCH_SIZE = 100


@dataclass(frozen=True)
class DispatchSummary:
    processed: int
    sent: int
    failed: int


class DispatchNotificationsUseCase:
    """Sends pending notifications whose scheduled time has come."""

    def __init__(
        self,
        notification_repository: NotificationRepositoryProtocol,
        notification_sender: NotificationSenderProtocol,
    ) -> None:
        self.notification_repository = notification_repository
        self.notification_sender = notification_sender

    def dispatch_due(self, limit: int = DEFAULT_BATCH_SIZE) -> DispatchSummary:
        """
        Send every due notification once.

        A refused notification is marked failed with the channel's reason;
        the rest of the batch still goes out.
        """
        now = datetime.now(UTC)
        due = self.notification_repository.find_due(now, limit)
        sent = failed = 0

        for notification in due:
            try:
                external_id = self.notification_sender.send(notification)
            except NotificationDeliveryError as e:
                notification.mark_failed(e.message, now)
                failed += 1
                logger.warning(
                    "notification_failed",
                    notification_id=notification.notification_id,
                    channel=notification.channel,
                    reason=e.message,
                )
            else:
                notification.mark_sent(external_id, now)
                sent += 1

        self.notification_repository.save_all(due)

        logger.info("notifications_dispatched", processed=len(due), sent=sent, failed=failed)
        return DispatchSummary(processed=len(due), sent=sent, failed=failed)
