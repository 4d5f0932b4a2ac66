from datetime import date, datetime
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import NotificationId
from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
    RecipientType,
)


class NotificationRepositoryProtocol(Protocol):
    def find_by_id(self, notification_id: NotificationId) -> Notification | None: ...

    def search(
        self,
        pagination: Pagination,
        recipient_type: RecipientType | None = None,
        recipient_id: int | None = None,
        status: NotificationStatus | None = None,
        channel: NotificationChannel | None = None,
        unread_only: bool = False,
    ) -> tuple[list[Notification], int]: ...

    def count_unread(self, recipient_type: RecipientType, recipient_id: int) -> int: ...

    def find_unread(
        self, recipient_type: RecipientType, recipient_id: int
    ) -> list[Notification]: ...

    def find_due(self, now: datetime, limit: int) -> list[Notification]: ...

    def next_notification_number(self, on: date) -> str: ...

    def save(self, notification: Notification) -> Notification: ...

    def save_all(self, notifications: list[Notification]) -> None: ...

    def delete(self, notification: Notification) -> None: ...
