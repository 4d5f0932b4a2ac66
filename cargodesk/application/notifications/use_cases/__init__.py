from .dispatch_notifications_use_case import DispatchNotificationsUseCase, DispatchSummary
from .notification_use_case import NotificationUseCase

__all__ = [
    "DispatchNotificationsUseCase",
    "DispatchSummary",
    "NotificationUseCase",
]
