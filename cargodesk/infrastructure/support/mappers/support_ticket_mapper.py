"""Mapper for SupportTicket ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    SupportTicketId,
    TicketReplyId,
    UserId,
)
from cargodesk.domain.support.entities.support_ticket import (
    ReplyType,
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketReply,
    TicketSource,
    TicketStatus,
)
from cargodesk.models import SupportTicket as SupportTicketORM
from cargodesk.models import TicketReply as TicketReplyORM
from cargodesk.utils import ensure_utc


class SupportTicketMapper:
    """
    Mapper for SupportTicket ORM ↔ Domain conversion.

    Replies are append-only: existing rows are never rewritten.
    """

    def to_domain(self, orm_model: SupportTicketORM) -> SupportTicket:
        return SupportTicket(
            id=SupportTicketId(orm_model.id),
            ticket_number=orm_model.ticket_number,
            customer_id=CustomerId(orm_model.customer_id),
            subject=orm_model.subject,
            description=orm_model.description,
            status=TicketStatus(orm_model.status),
            priority=TicketPriority(orm_model.priority),
            category=TicketCategory(orm_model.category),
            source=TicketSource(orm_model.source),
            tags=list(orm_model.tags or []),
            assigned_to=UserId(orm_model.assigned_to) if orm_model.assigned_to else None,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            first_response_at=ensure_utc(orm_model.first_response_at),
            resolved_at=ensure_utc(orm_model.resolved_at),
            closed_at=ensure_utc(orm_model.closed_at),
            satisfaction_rating=orm_model.satisfaction_rating,
            satisfaction_feedback=orm_model.satisfaction_feedback,
            replies=[self._reply_to_domain(reply) for reply in orm_model.replies],
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def _reply_to_domain(self, orm_reply: TicketReplyORM) -> TicketReply:
        # Replies of deleted users keep their text under an unpersisted id
        return TicketReply(
            id=TicketReplyId(orm_reply.id),
            user_id=UserId(orm_reply.user_id or 0),
            message=orm_reply.message,
            type=ReplyType(orm_reply.type),
            is_internal=orm_reply.is_internal,
            from_staff=orm_reply.from_staff,
            created_at=ensure_utc(orm_reply.created_at),
        )

    def to_orm(
        self, domain_entity: SupportTicket, orm_model: SupportTicketORM | None = None
    ) -> SupportTicketORM:
        if orm_model is None:
            orm_model = SupportTicketORM(
                ticket_number=domain_entity.ticket_number,
                customer_id=domain_entity.customer_id.value,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
            if domain_entity.created_at is not None:
                orm_model.created_at = domain_entity.created_at
        orm_model.subject = domain_entity.subject
        orm_model.description = domain_entity.description
        orm_model.status = domain_entity.status
        orm_model.priority = domain_entity.priority
        orm_model.category = domain_entity.category
        orm_model.source = domain_entity.source
        orm_model.tags = list(domain_entity.tags)
        orm_model.assigned_to = (
            domain_entity.assigned_to.value if domain_entity.assigned_to else None
        )
        orm_model.first_response_at = domain_entity.first_response_at
        orm_model.resolved_at = domain_entity.resolved_at
        orm_model.closed_at = domain_entity.closed_at
        orm_model.satisfaction_rating = domain_entity.satisfaction_rating
        orm_model.satisfaction_feedback = domain_entity.satisfaction_feedback

        for reply in domain_entity.replies:
            if reply.id.value == 0:
                orm_reply = TicketReplyORM(
                    user_id=reply.user_id.value or None,
                    message=reply.message,
                    type=reply.type,
                    is_internal=reply.is_internal,
                    from_staff=reply.from_staff,
                )
                if reply.created_at is not None:
                    orm_reply.created_at = reply.created_at
                orm_model.replies.append(orm_reply)
        return orm_model
