"""Notification domain exceptions."""

from cargodesk.domain.common.exceptions import DomainError, EntityNotFoundError


class NotificationNotFoundError(EntityNotFoundError):
    """Raised when a notification cannot be found."""

    def __init__(self, notification_id: int) -> None:
        super().__init__("Notification", notification_id)


class NotificationDeliveryError(DomainError):
    """Raised by a sender when a channel refuses a notification."""
