"""Tests for DispatchNotificationsUseCase."""

from datetime import UTC, datetime, timedelta

from cargodesk.application.notifications.use_cases import DispatchNotificationsUseCase
from cargodesk.domain.common.value_objects.ids import NotificationId
from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
    RecipientType,
)
from cargodesk.domain.notifications.exceptions import NotificationDeliveryError


class InMemoryNotifications:
    def __init__(self, notifications: list[Notification]) -> None:
        self.notifications = notifications
        self.saved: list[Notification] = []

    def find_due(self, now: datetime, limit: int) -> list[Notification]:
        return [n for n in self.notifications if n.is_ready_to_send(now)][:limit]

    def save_all(self, notifications: list[Notification]) -> None:
        self.saved.extend(notifications)


class RefusingSmsSender:
    def send(self, notification: Notification) -> str | None:
        if notification.channel == NotificationChannel.SMS:
            raise NotificationDeliveryError("SMS gateway unavailable")
        return "msg-1"


def _notification(number: int, channel: NotificationChannel, **extra: object) -> Notification:
    notification = Notification.create(
        f"NOTIF-20261017-{number:06d}",
        "announcement",
        channel,
        RecipientType.CUSTOMER,
        1,
        "Holiday hours",
        "Depots close early on Friday.",
        **extra,
    )
    notification.id = NotificationId(number)
    return notification


class TestDispatchNotifications:
    """Test suite for DispatchNotificationsUseCase."""

    def test_refused_notification_fails_without_stopping_batch(self) -> None:
        sms = _notification(1, NotificationChannel.SMS, recipient_phone="+255700000001")
        email = _notification(2, NotificationChannel.EMAIL, recipient_email="a@kilima.co.tz")
        repository = InMemoryNotifications([sms, email])

        summary = DispatchNotificationsUseCase(repository, RefusingSmsSender()).dispatch_due()

        assert (summary.processed, summary.sent, summary.failed) == (2, 1, 1)
        assert sms.status == NotificationStatus.FAILED
        assert sms.failure_reason == "SMS gateway unavailable"
        assert email.status == NotificationStatus.SENT
        assert email.external_id == "msg-1"
        assert repository.saved == [sms, email]

    def test_scheduled_notifications_wait(self) -> None:
        later = _notification(
            1,
            NotificationChannel.IN_APP,
            scheduled_at=datetime.now(UTC) + timedelta(hours=1),
        )
        repository = InMemoryNotifications([later])

        summary = DispatchNotificationsUseCase(repository, RefusingSmsSender()).dispatch_due()

        assert summary.processed == 0
        assert later.status == NotificationStatus.PENDING

    def test_limit(self) -> None:
        repository = InMemoryNotifications(
            [_notification(n, NotificationChannel.IN_APP) for n in range(1, 4)]
        )

        summary = DispatchNotificationsUseCase(repository, RefusingSmsSender()).dispatch_due(2)

        assert summary.processed == 2
