"""Mapper for Notification ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.ids import NotificationId, UserId
from cargodesk.domain.notifications.entities.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
    NotificationStatus,
    RecipientType,
)
from cargodesk.models import Notification as NotificationORM
from cargodesk.utils import ensure_utc


class NotificationMapper:
    def to_domain(self, orm_model: NotificationORM) -> Notification:
        return Notification(
            id=NotificationId(orm_model.id),
            notification_id=orm_model.notification_id,
            type=orm_model.type,
            channel=NotificationChannel(orm_model.channel),
            recipient_type=RecipientType(orm_model.recipient_type),
            recipient_id=orm_model.recipient_id,
            recipient_email=orm_model.recipient_email,
            recipient_phone=orm_model.recipient_phone,
            title=orm_model.title,
            message=orm_model.message,
            data=dict(orm_model.data or {}),
            priority=NotificationPriority(orm_model.priority),
            status=NotificationStatus(orm_model.status),
            scheduled_at=ensure_utc(orm_model.scheduled_at),
            sent_at=ensure_utc(orm_model.sent_at),
            delivered_at=ensure_utc(orm_model.delivered_at),
            read_at=ensure_utc(orm_model.read_at),
            failed_at=ensure_utc(orm_model.failed_at),
            failure_reason=orm_model.failure_reason,
            external_id=orm_model.external_id,
            related_type=orm_model.related_type,
            related_id=orm_model.related_id,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: Notification, orm_model: NotificationORM | None = None
    ) -> NotificationORM:
        if orm_model is None:
            orm_model = NotificationORM(
                notification_id=domain_entity.notification_id,
                type=domain_entity.type,
                channel=domain_entity.channel,
                recipient_type=domain_entity.recipient_type,
                recipient_id=domain_entity.recipient_id,
                recipient_email=domain_entity.recipient_email,
                recipient_phone=domain_entity.recipient_phone,
                title=domain_entity.title,
                message=domain_entity.message,
                data=dict(domain_entity.data),
                priority=domain_entity.priority,
                scheduled_at=domain_entity.scheduled_at,
                related_type=domain_entity.related_type,
                related_id=domain_entity.related_id,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
            if domain_entity.created_at is not None:
                orm_model.created_at = domain_entity.created_at
        # Only the delivery state changes after creation
        orm_model.status = domain_entity.status
        orm_model.sent_at = domain_entity.sent_at
        orm_model.delivered_at = domain_entity.delivered_at
        orm_model.read_at = domain_entity.read_at
        orm_model.failed_at = domain_entity.failed_at
        orm_model.failure_reason = domain_entity.failure_reason
        orm_model.external_id = domain_entity.external_id
        return orm_model
