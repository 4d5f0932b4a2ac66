from cargodesk.infrastructure.notifications.schemas.notification_schemas import (
    DispatchResponse,
    MarkAllReadResponse,
    NotificationCreateRequest,
    NotificationResponse,
    UnreadCountResponse,
)

__all__ = [
    "DispatchResponse",
    "MarkAllReadResponse",
    "NotificationCreateRequest",
    "NotificationResponse",
    "UnreadCountResponse",
]
