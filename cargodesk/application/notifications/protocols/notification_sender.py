from typing import Protocol

from cargodesk.domain.notifications.entities.notification import Notification


class NotificationSenderProtocol(Protocol):
    def send(self, notification: Notification) -> str | None:
        """
        Hand a notification to its channel.

        Returns:
            The channel's message id, if it issues one

        Raises:
            NotificationDeliveryError: If the channel refuses the message
        """
        ...
