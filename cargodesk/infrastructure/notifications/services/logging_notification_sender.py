"""Notification sender that records outbound messages in the application log."""

import logging
import uuid

from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
)
from cargodesk.domain.notifications.exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)


class LoggingNotificationSender:
    """
    Stand-in for email, SMS and push gateways.

    In-app notifications need no gateway and get no external id. Other
    channels are written to the log and given a generated message id.
    """

    def send(self, notification: Notification) -> str | None:
        if notification.channel == NotificationChannel.IN_APP:
            return None

        address = self._address(notification)
        if not address:
            raise NotificationDeliveryError(
                f"No {notification.channel} address for {notification.recipient_type} "
                f"{notification.recipient_id}"
            )

        external_id = uuid.uuid4().hex
        logger.info(
            f"[{notification.channel}] to {address}: {notification.title} "
            f"({notification.notification_id}, message id {external_id})"
        )
        return external_id

    @staticmethod
    def _address(notification: Notification) -> str | None:
        if notification.channel == NotificationChannel.EMAIL:
            return notification.recipient_email
        if notification.channel == NotificationChannel.SMS:
            return notification.recipient_phone
        return f"{notification.recipient_type}:{notification.recipient_id}"
