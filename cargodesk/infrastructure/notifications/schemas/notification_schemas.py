from datetime import datetime
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationStatus,
    RecipientType,
)


class NotificationCreateRequest(BaseModel):
    type: str = Field(..., min_length=1, max_length=50, description="e.g. shipment_update")
    channel: NotificationChannel = NotificationChannel.IN_APP
    recipient_type: RecipientType
    recipient_id: int
    recipient_email: EmailStr | None = None
    recipient_phone: str | None = Field(None, max_length=30)
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    scheduled_at: datetime | None = Field(None, description="Hold back until this time")
    data: dict[str, Any] = Field(default_factory=dict)
    related_type: str | None = Field(None, max_length=30)
    related_id: int | None = None


class NotificationResponse(BaseModel):
    id: int
    notification_id: str
    type: str
    channel: NotificationChannel
    recipient_type: RecipientType
    recipient_id: int
    title: str
    message: str
    data: dict[str, Any]
    priority: NotificationPriority
    status: NotificationStatus
    is_read: bool
    scheduled_at: datetime | None
    sent_at: datetime | None
    delivered_at: datetime | None
    read_at: datetime | None
    failed_at: datetime | None
    failure_reason: str | None
    related_type: str | None
    related_id: int | None
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id.value,
            notification_id=notification.notification_id,
            type=notification.type,
            channel=notification.channel,
            recipient_type=notification.recipient_type,
            recipient_id=notification.recipient_id,
            title=notification.title,
            message=notification.message,
            data=notification.data,
            priority=notification.priority,
            status=notification.status,
            is_read=notification.is_read,
            scheduled_at=notification.scheduled_at,
            sent_at=notification.sent_at,
            delivered_at=notification.delivered_at,
            read_at=notification.read_at,
            failed_at=notification.failed_at,
            failure_reason=notification.failure_reason,
            related_type=notification.related_type,
            related_id=notification.related_id,
            created_at=notification.created_at,
        )


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    marked: int


class DispatchResponse(BaseModel):
    processed: int
    sent: int
    failed: int
