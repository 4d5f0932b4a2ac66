"""Repository for notifications."""

import logging
from datetime import date, datetime

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.orm import Session

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import NotificationId
from cargodesk.domain.common.value_objects.reference_number import NOTIFICATION_NUMBER
from cargodesk.domain.notifications.entities.notification import (
    UNREAD_STATUSES,
    Notification,
    NotificationChannel,
    NotificationStatus,
    RecipientType,
)
from cargodesk.domain.notifications.exceptions import NotificationNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.notifications.mappers.notification_mapper import (
    NotificationMapper,
)
from cargodesk.models import Notification as NotificationORM

logger = logging.getLogger(__name__)


def _unread() -> ColumnElement[bool]:
    return and_(
        NotificationORM.status.in_([str(s) for s in UNREAD_STATUSES]),
        NotificationORM.read_at.is_(None),
    )


def _addressed_to(recipient_type: RecipientType, recipient_id: int) -> ColumnElement[bool]:
    return and_(
        NotificationORM.recipient_type == recipient_type,
        NotificationORM.recipient_id == recipient_id,
    )


class NotificationRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = NotificationMapper()

    def find_by_id(self, notification_id: NotificationId) -> Notification | None:
        orm_model = self.db.get(NotificationORM, notification_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        recipient_type: RecipientType | None = None,
        recipient_id: int | None = None,
        status: NotificationStatus | None = None,
        channel: NotificationChannel | None = None,
        unread_only: bool = False,
    ) -> tuple[list[Notification], int]:
        stmt: Select[tuple[NotificationORM]] = select(NotificationORM)
        if recipient_type is not None and recipient_id is not None:
            stmt = stmt.where(_addressed_to(recipient_type, recipient_id))
        if status is not None:
            stmt = stmt.where(NotificationORM.status == status)
        if channel is not None:
            stmt = stmt.where(NotificationORM.channel == channel)
        if unread_only:
            stmt = stmt.where(_unread())

        stmt = stmt.order_by(NotificationORM.created_at.desc(), NotificationORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def count_unread(self, recipient_type: RecipientType, recipient_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(NotificationORM)
            .where(_addressed_to(recipient_type, recipient_id), _unread())
        )
        return self.db.execute(stmt).scalar_one()

    def find_unread(self, recipient_type: RecipientType, recipient_id: int) -> list[Notification]:
        stmt = select(NotificationORM).where(
            _addressed_to(recipient_type, recipient_id), _unread()
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def find_due(self, now: datetime, limit: int) -> list[Notification]:
        """Pending notifications that are unscheduled or scheduled at or before ``now``."""
        stmt = (
            select(NotificationORM)
            .where(
                NotificationORM.status == NotificationStatus.PENDING,
                or_(
                    NotificationORM.scheduled_at.is_(None),
                    NotificationORM.scheduled_at <= now,
                ),
            )
            .order_by(NotificationORM.created_at, NotificationORM.id)
            .limit(limit)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def next_notification_number(self, on: date) -> str:
        return next_reference(
            self.db, NotificationORM.notification_id, NOTIFICATION_NUMBER, on
        )

    def save(self, notification: Notification) -> Notification:
        if notification.id.value == 0:
            orm_model = self.mapper.to_orm(notification)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.debug(f"Queued notification {orm_model.notification_id}")
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(NotificationORM, notification.id.value)
        if not orm_model:
            raise NotificationNotFoundError(notification.id.value)
        self.mapper.to_orm(notification, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def save_all(self, notifications: list[Notification]) -> None:
        """Persist state changes of existing notifications in one transaction."""
        if not notifications:
            return
        ids = [notification.id.value for notification in notifications]
        rows = {
            row.id: row
            for row in self.db.execute(
                select(NotificationORM).where(NotificationORM.id.in_(ids))
            ).scalars()
        }
        for notification in notifications:
            orm_model = rows.get(notification.id.value)
            if orm_model is None:
                raise NotificationNotFoundError(notification.id.value)
            self.mapper.to_orm(notification, orm_model)
        self.db.commit()

    def delete(self, notification: Notification) -> None:
        orm_model = self.db.get(NotificationORM, notification.id.value)
        if not orm_model:
            raise NotificationNotFoundError(notification.id.value)
        self.db.delete(orm_model)
        self.db.commit()
