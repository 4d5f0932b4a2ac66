"""Tests for LoggingNotificationSender."""

import pytest

from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    RecipientType,
)
from cargodesk.domain.notifications.exceptions import NotificationDeliveryError
from cargodesk.infrastructure.notifications.services import LoggingNotificationSender


def _notification(channel: NotificationChannel, **extra: object) -> Notification:
    return Notification.create(
        "NOTIF-20261017-000001",
        "announcement",
        channel,
        RecipientType.DRIVER,
        7,
        "Route ready",
        "Your route for tomorrow is planned.",
        **extra,
    )


class TestLoggingNotificationSender:
    """Test suite for LoggingNotificationSender."""

    def test_in_app_needs_no_gateway(self) -> None:
        assert LoggingNotificationSender().send(_notification(NotificationChannel.IN_APP)) is None

    def test_email_gets_message_id(self, caplog: pytest.LogCaptureFixture) -> None:
        notification = _notification(
            NotificationChannel.EMAIL, recipient_email="juma@cargodesk.co.tz"
        )

        with caplog.at_level("INFO"):
            external_id = LoggingNotificationSender().send(notification)

        assert external_id
        assert "juma@cargodesk.co.tz" in caplog.text

    def test_missing_address_is_refused(self) -> None:
        notification = _notification(NotificationChannel.SMS, recipient_phone="+255700000001")
        notification.recipient_phone = None

        with pytest.raises(NotificationDeliveryError):
            LoggingNotificationSender().send(notification)
