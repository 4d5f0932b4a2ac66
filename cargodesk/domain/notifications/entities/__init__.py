from .notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationStatus,
    RecipientType,
)

__all__ = [
    "Notification",
    "NotificationChannel",
    "NotificationPriority",
    "NotificationStatus",
    "RecipientType",
]
