"""Support ticket aggregate with its reply thread."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import StrEnum

from cargodesk.domain.common.aggregate_root import AggregateRoot
from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    SupportTicketId,
    TicketReplyId,
    UserId,
)

MIN_RATING = 1
MAX_RATING = 5


class TicketStatus(StrEnum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    WAITING_CUSTOMER = "waiting_customer"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def sla_hours(self) -> int:
        return SLA_HOURS[self]


SLA_HOURS = {
    TicketPriority.URGENT: 2,
    TicketPriority.HIGH: 8,
    TicketPriority.MEDIUM: 24,
    TicketPriority.LOW: 72,
}


class TicketCategory(StrEnum):
    GENERAL = "general"
    SHIPPING = "shipping"
    BILLING = "billing"
    TECHNICAL = "technical"
    COMPLAINT = "complaint"
    FEATURE_REQUEST = "feature_request"


class TicketSource(StrEnum):
    WEB = "web"
    EMAIL = "email"
    PHONE = "phone"
    CHAT = "chat"


class ReplyType(StrEnum):
    REPLY = "reply"
    NOTE = "note"
    STATUS_CHANGE = "status_change"


OPEN_STATUSES = frozenset(
    {TicketStatus.OPEN, TicketStatus.IN_PROGRESS, TicketStatus.WAITING_CUSTOMER}
)


def _hours_between(start: datetime | None, end: datetime | None) -> float | None:
    if start is None or end is None:
        return None
    return round((end - start).total_seconds() / 3600, 1)


@dataclass
class TicketReply(Entity[TicketReplyId]):
    """One message on a ticket thread. Internal notes are hidden from customers."""

    id: TicketReplyId
    user_id: UserId
    message: str
    type: ReplyType = ReplyType.REPLY
    is_internal: bool = False
    from_staff: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            raise ValidationError("Reply message cannot be empty", field="message")

    @classmethod
    def create(
        cls,
        user_id: UserId,
        message: str,
        from_staff: bool,
        is_internal: bool = False,
        reply_type: ReplyType = ReplyType.REPLY,
    ) -> "TicketReply":
        if is_internal and not from_staff:
            raise ValidationError("Only staff can add internal notes", field="is_internal")
        return cls(
            id=TicketReplyId.generate(),
            user_id=user_id,
            message=message.strip(),
            type=ReplyType.NOTE if is_internal else reply_type,
            is_internal=is_internal,
            from_staff=from_staff,
            created_at=datetime.now(UTC),
        )


@dataclass
class SupportTicket(AggregateRoot[SupportTicketId]):
    """
    A customer support request.

    Business Rules:
    - The SLA window depends on priority
    - The first public staff reply marks the first response
    - Only resolved or closed tickets can be rated
    """

    id: SupportTicketId
    ticket_number: str
    customer_id: CustomerId
    subject: str
    description: str
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    category: TicketCategory = TicketCategory.GENERAL
    source: TicketSource = TicketSource.WEB
    tags: list[str] = field(default_factory=list)
    assigned_to: UserId | None = None
    created_by: UserId | None = None
    first_response_at: datetime | None = None
    resolved_at: datetime | None = None
    closed_at: datetime | None = None
    satisfaction_rating: int | None = None
    satisfaction_feedback: str | None = None
    replies: list[TicketReply] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.subject or not self.subject.strip():
            raise ValidationError("Subject cannot be empty", field="subject")
        if not self.description or not self.description.strip():
            raise ValidationError("Description cannot be empty", field="description")

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def due_at(self) -> datetime | None:
        if self.created_at is None:
            return None
        return self.created_at + timedelta(hours=self.priority.sla_hours)

    def is_overdue(self, now: datetime | None = None) -> bool:
        due = self.due_at()
        if not self.is_open or due is None:
            return False
        return (now or datetime.now(UTC)) > due

    @property
    def response_time_hours(self) -> float | None:
        return _hours_between(self.created_at, self.first_response_at)

    @property
    def resolution_time_hours(self) -> float | None:
        return _hours_between(self.created_at, self.resolved_at)

    def public_replies(self) -> list[TicketReply]:
        return [reply for reply in self.replies if not reply.is_internal]

    def add_reply(self, reply: TicketReply, now: datetime | None = None) -> None:
        """
        Append a reply and apply its side effects on the ticket status.

        Raises:
            BusinessRuleViolationError: If the ticket is closed
        """
        if self.status == TicketStatus.CLOSED:
            raise BusinessRuleViolationError(
                "open_ticket", "Cannot reply to a closed ticket"
            )
        self.replies.append(reply)
        if reply.is_internal:
            return
        if reply.from_staff:
            if self.first_response_at is None:
                self.first_response_at = now or datetime.now(UTC)
            if self.status == TicketStatus.OPEN:
                self.status = TicketStatus.IN_PROGRESS
        elif self.status == TicketStatus.WAITING_CUSTOMER:
            self.status = TicketStatus.IN_PROGRESS

    def assign(self, user_id: UserId | None) -> None:
        self.assigned_to = user_id

    def change_status(self, status: TicketStatus, now: datetime | None = None) -> None:
        """Move the ticket to any status, stamping resolved_at and closed_at."""
        if self.status == TicketStatus.CLOSED and status != TicketStatus.CLOSED:
            raise InvalidStatusTransitionError("ticket", self.status, status)
        at = now or datetime.now(UTC)
        self.status = status
        if status == TicketStatus.RESOLVED:
            self.resolved_at = at
        elif status == TicketStatus.CLOSED:
            self.closed_at = at
            if self.resolved_at is None:
                self.resolved_at = at

    def resolve(self, now: datetime | None = None) -> None:
        self.change_status(TicketStatus.RESOLVED, now)

    def close(self, now: datetime | None = None) -> None:
        self.change_status(TicketStatus.CLOSED, now)

    def rate(self, rating: int, feedback: str | None = None) -> None:
        if rating < MIN_RATING or rating > MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                field="satisfaction_rating",
                value=rating,
            )
        if self.status not in (TicketStatus.RESOLVED, TicketStatus.CLOSED):
            raise BusinessRuleViolationError(
                "rate_finished_ticket", "Only resolved or closed tickets can be rated"
            )
        self.satisfaction_rating = rating
        self.satisfaction_feedback = feedback

    @classmethod
    def create(
        cls,
        ticket_number: str,
        customer_id: CustomerId,
        subject: str,
        description: str,
        priority: TicketPriority = TicketPriority.MEDIUM,
        category: TicketCategory = TicketCategory.GENERAL,
        source: TicketSource = TicketSource.WEB,
        tags: list[str] | None = None,
        created_by: UserId | None = None,
        assigned_to: UserId | None = None,
    ) -> "SupportTicket":
        return cls(
            id=SupportTicketId.generate(),
            ticket_number=ticket_number,
            customer_id=customer_id,
            subject=subject.strip(),
            description=description.strip(),
            priority=priority,
            category=category,
            source=source,
            tags=tags or [],
            created_by=created_by,
            assigned_to=assigned_to,
            created_at=datetime.now(UTC),
        )
