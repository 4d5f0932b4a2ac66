"""Notification entity."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from cargodesk.domain.common.value_objects.ids import NotificationId, UserId


class NotificationChannel(StrEnum):
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"
    IN_APP = "in_app"


class RecipientType(StrEnum):
    USER = "user"
    CUSTOMER = "customer"
    DRIVER = "driver"


class NotificationPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class NotificationStatus(StrEnum):
    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    READ = "read"


UNREAD_STATUSES = frozenset(
    {NotificationStatus.PENDING, NotificationStatus.SENT, NotificationStatus.DELIVERED}
)


@dataclass
class Notification(Entity[NotificationId]):
    """
    A message addressed to a user, customer or driver over one channel.

    Lifecycle: pending -> sent | delivered | failed, and read once seen.
    """

    id: NotificationId
    notification_id: str
    type: str
    channel: NotificationChannel
    recipient_type: RecipientType
    recipient_id: int
    title: str
    message: str
    recipient_email: str | None = None
    recipient_phone: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    status: NotificationStatus = NotificationStatus.PENDING
    scheduled_at: datetime | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
    read_at: datetime | None = None
    failed_at: datetime | None = None
    failure_reason: str | None = None
    external_id: str | None = None
    related_type: str | None = None
    related_id: int | None = None
    created_by: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValidationError("Title cannot be empty", field="title")
        if not self.message or not self.message.strip():
            raise ValidationError("Message cannot be empty", field="message")
        if self.channel == NotificationChannel.EMAIL and not self.recipient_email:
            raise ValidationError("Email notifications need an address", field="recipient_email")
        if self.channel == NotificationChannel.SMS and not self.recipient_phone:
            raise ValidationError("SMS notifications need a phone number", field="recipient_phone")

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    @property
    def is_unread(self) -> bool:
        return self.status in UNREAD_STATUSES and self.read_at is None

    def is_scheduled(self, now: datetime | None = None) -> bool:
        return self.scheduled_at is not None and self.scheduled_at > (now or datetime.now(UTC))

    def is_ready_to_send(self, now: datetime | None = None) -> bool:
        return self.status == NotificationStatus.PENDING and not self.is_scheduled(now)

    def mark_sent(self, external_id: str | None = None, now: datetime | None = None) -> None:
        """Record a successful hand-off. In-app messages are delivered on the spot."""
        if self.status != NotificationStatus.PENDING:
            raise InvalidStatusTransitionError("notification", self.status, "sent")
        at = now or datetime.now(UTC)
        self.sent_at = at
        self.external_id = external_id
        if self.channel == NotificationChannel.IN_APP:
            self.status = NotificationStatus.DELIVERED
            self.delivered_at = at
        else:
            self.status = NotificationStatus.SENT

    def mark_delivered(self, now: datetime | None = None) -> None:
        if self.status != NotificationStatus.SENT:
            raise InvalidStatusTransitionError("notification", self.status, "delivered")
        self.status = NotificationStatus.DELIVERED
        self.delivered_at = now or datetime.now(UTC)

    def mark_failed(self, reason: str, now: datetime | None = None) -> None:
        self.status = NotificationStatus.FAILED
        self.failed_at = now or datetime.now(UTC)
        self.failure_reason = reason

    def mark_read(self, now: datetime | None = None) -> bool:
        """Mark as read. Returns False when it was already read."""
        if self.is_read:
            return False
        self.status = NotificationStatus.READ
        self.read_at = now or datetime.now(UTC)
        return True

    @classmethod
    def create(
        cls,
        notification_id: str,
        notification_type: str,
        channel: NotificationChannel,
        recipient_type: RecipientType,
        recipient_id: int,
        title: str,
        message: str,
        **optional: Any,  # noqa: ANN401
    ) -> "Notification":
        return cls(
            id=NotificationId.generate(),
            notification_id=notification_id,
            type=notification_type,
            channel=channel,
            recipient_type=recipient_type,
            recipient_id=recipient_id,
            title=title.strip(),
            message=message.strip(),
            created_at=datetime.now(UTC),
            **optional,
        )
