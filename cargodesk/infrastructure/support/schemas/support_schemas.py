from datetime import datetime

from pydantic import BaseModel, Field

from cargodesk.domain.support.entities.support_ticket import (
    ReplyType,
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketReply,
    TicketSource,
    TicketStatus,
)


class TicketCreateRequest(BaseModel):
    customer_id: int | None = Field(
        None, description="Required for staff; customers always open tickets for themselves"
    )
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    priority: TicketPriority = TicketPriority.MEDIUM
    category: TicketCategory = TicketCategory.GENERAL
    source: TicketSource = TicketSource.WEB
    tags: list[str] = Field(default_factory=list)
    assigned_to: int | None = None


class TicketReplyRequest(BaseModel):
    message: str = Field(..., min_length=1)
    is_internal: bool = Field(False, description="Staff-only note hidden from the customer")


class TicketAssignRequest(BaseModel):
    assigned_to: int | None = Field(None, description="Staff user, or null to unassign")


class TicketStatusRequest(BaseModel):
    status: TicketStatus


class TicketRatingRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    feedback: str | None = None


class TicketReplyResponse(BaseModel):
    id: int
    user_id: int | None
    message: str
    type: ReplyType
    is_internal: bool
    from_staff: bool
    created_at: datetime | None

    @classmethod
    def from_domain(cls, reply: TicketReply) -> "TicketReplyResponse":
        return cls(
            id=reply.id.value,
            user_id=reply.user_id.value or None,
            message=reply.message,
            type=reply.type,
            is_internal=reply.is_internal,
            from_staff=reply.from_staff,
            created_at=reply.created_at,
        )


class TicketResponse(BaseModel):
    id: int
    ticket_number: str
    customer_id: int
    subject: str
    description: str
    status: TicketStatus
    priority: TicketPriority
    category: TicketCategory
    source: TicketSource
    tags: list[str]
    assigned_to: int | None
    created_by: int | None
    first_response_at: datetime | None
    resolved_at: datetime | None
    closed_at: datetime | None
    due_at: datetime | None
    is_overdue: bool
    response_time_hours: float | None
    resolution_time_hours: float | None
    satisfaction_rating: int | None
    satisfaction_feedback: str | None
    replies: list[TicketReplyResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(
        cls, ticket: SupportTicket, include_internal: bool = True
    ) -> "TicketResponse":
        replies = ticket.replies if include_internal else ticket.public_replies()
        return cls(
            id=ticket.id.value,
            ticket_number=ticket.ticket_number,
            customer_id=ticket.customer_id.value,
            subject=ticket.subject,
            description=ticket.description,
            status=ticket.status,
            priority=ticket.priority,
            category=ticket.category,
            source=ticket.source,
            tags=ticket.tags,
            assigned_to=ticket.assigned_to.value if ticket.assigned_to else None,
            created_by=ticket.created_by.value if ticket.created_by else None,
            first_response_at=ticket.first_response_at,
            resolved_at=ticket.resolved_at,
            closed_at=ticket.closed_at,
            due_at=ticket.due_at(),
            is_overdue=ticket.is_overdue(),
            response_time_hours=ticket.response_time_hours,
            resolution_time_hours=ticket.resolution_time_hours,
            satisfaction_rating=ticket.satisfaction_rating,
            satisfaction_feedback=ticket.satisfaction_feedback,
            replies=[TicketReplyResponse.from_domain(reply) for reply in replies],
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )

    @classmethod
    def for_customer(cls, ticket: SupportTicket) -> "TicketResponse":
        return cls.from_domain(ticket, include_internal=False)
