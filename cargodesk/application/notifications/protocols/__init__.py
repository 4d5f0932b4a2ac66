from .notification_repository import NotificationRepositoryProtocol
from .notification_sender import NotificationSenderProtocol

__all__ = [
    "NotificationRepositoryProtocol",
    "NotificationSenderProtocol",
]
