"""
Support ticket use case.

``customer_id`` arguments scope an operation to one customer's tickets;
staff pass None.
"""

from datetime import UTC, datetime

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.application.identity.protocols.user_repository import UserRepositoryProtocol
from cargodesk.application.support.protocols.support_ticket_repository import (
    SupportTicketRepositoryProtocol,
)
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.ids import CustomerId, SupportTicketId, UserId
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.domain.identity.exceptions import UserNotFoundError
from cargodesk.domain.support.entities.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketReply,
    TicketSource,
    TicketStatus,
)
from cargodesk.domain.support.exceptions import SupportTicketNotFoundError

logger = structlog.get_logger(__name__)


class SupportTicketUseCase:
    """Use case for support ticket operations."""

    def __init__(
        self,
        ticket_repository: SupportTicketRepositoryProtocol,
        customer_repository: CustomerRepositoryProtocol,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        self.ticket_repository = ticket_repository
        self.customer_repository = customer_repository
        self.user_repository = user_repository

    def create_ticket(
        self,
        customer_id: int,
        subject: str,
        description: str,
        created_by: int,
        priority: TicketPriority = TicketPriority.MEDIUM,
        category: TicketCategory = TicketCategory.GENERAL,
        source: TicketSource = TicketSource.WEB,
        tags: list[str] | None = None,
        assigned_to: int | None = None,
    ) -> SupportTicket:
        """
        Open a ticket on behalf of a customer.

        Raises:
            CustomerNotFoundError: If customer is not found
            ValidationError: If the assignee is not a staff user
        """
        customer = self.customer_repository.find_by_id(CustomerId(customer_id))
        if not customer:
            raise CustomerNotFoundError(customer_id)

        ticket = SupportTicket.create(
            ticket_number=self.ticket_repository.next_ticket_number(datetime.now(UTC).date()),
            customer_id=customer.id,
            subject=subject,
            description=description,
            priority=priority,
            category=category,
            source=source,
            tags=tags,
            created_by=UserId(created_by),
            assigned_to=self._staff_user_id(assigned_to) if assigned_to else None,
        )
        ticket = self.ticket_repository.save(ticket)

        logger.info(
            "support_ticket_created",
            ticket_id=ticket.id.value,
            ticket_number=ticket.ticket_number,
            customer_id=customer_id,
            priority=ticket.priority,
        )
        return ticket

    def get_ticket(self, ticket_id: int, customer_id: int | None = None) -> SupportTicket:
        ticket = self.ticket_repository.find_by_id(SupportTicketId(ticket_id))
        if not ticket or (customer_id is not None and ticket.customer_id.value != customer_id):
            raise SupportTicketNotFoundError(ticket_id)
        return ticket

    def list_tickets(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: TicketStatus | None = None,
        priority: TicketPriority | None = None,
        category: TicketCategory | None = None,
        assigned_to: int | None = None,
        customer_id: int | None = None,
        overdue_only: bool = False,
    ) -> PaginatedResult[SupportTicket]:
        items, total = self.ticket_repository.search(
            pagination,
            search=search,
            status=status,
            priority=priority,
            category=category,
            assigned_to=UserId(assigned_to) if assigned_to else None,
            customer_id=CustomerId(customer_id) if customer_id else None,
            overdue_at=datetime.now(UTC) if overdue_only else None,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def add_reply(
        self,
        ticket_id: int,
        user_id: int,
        message: str,
        from_staff: bool,
        is_internal: bool = False,
        customer_id: int | None = None,
    ) -> SupportTicket:
        """
        Post a message on the ticket thread.

        Raises:
            SupportTicketNotFoundError: If ticket is not found for this customer
            ValidationError: If a customer tries to add an internal note
            BusinessRuleViolationError: If the ticket is closed
        """
        ticket = self.get_ticket(ticket_id, customer_id)
        reply = TicketReply.create(
            user_id=UserId(user_id),
            message=message,
            from_staff=from_staff,
            is_internal=is_internal,
        )
        ticket.add_reply(reply)
        ticket = self.ticket_repository.save(ticket)

        logger.info(
            "support_ticket_replied",
            ticket_id=ticket_id,
            from_staff=from_staff,
            is_internal=is_internal,
            status=ticket.status,
        )
        return ticket

    def assign(self, ticket_id: int, assignee_id: int | None) -> SupportTicket:
        ticket = self.get_ticket(ticket_id)
        ticket.assign(self._staff_user_id(assignee_id) if assignee_id else None)
        ticket = self.ticket_repository.save(ticket)
        logger.info("support_ticket_assigned", ticket_id=ticket_id, assigned_to=assignee_id)
        return ticket

    def change_status(self, ticket_id: int, status: TicketStatus) -> SupportTicket:
        ticket = self.get_ticket(ticket_id)
        previous = ticket.status
        ticket.change_status(status)
        ticket = self.ticket_repository.save(ticket)
        logger.info(
            "support_ticket_status_changed",
            ticket_id=ticket_id,
            old_status=previous,
            new_status=status,
        )
        return ticket

    def resolve(self, ticket_id: int) -> SupportTicket:
        return self.change_status(ticket_id, TicketStatus.RESOLVED)

    def close(self, ticket_id: int) -> SupportTicket:
        return self.change_status(ticket_id, TicketStatus.CLOSED)

    def rate(
        self, ticket_id: int, customer_id: int, rating: int, feedback: str | None = None
    ) -> SupportTicket:
        """
        Record the customer's satisfaction with a finished ticket.

        Raises:
            ValidationError: If the rating is outside 1-5
            BusinessRuleViolationError: If the ticket is still open
        """
        ticket = self.get_ticket(ticket_id, customer_id)
        ticket.rate(rating, feedback)
        ticket = self.ticket_repository.save(ticket)
        logger.info("support_ticket_rated", ticket_id=ticket_id, rating=rating)
        return ticket

    def _staff_user_id(self, user_id: int) -> UserId:
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        if not user.is_staff:
            raise ValidationError(
                "Tickets can only be assigned to staff", field="assigned_to", value=user_id
            )
        return user.id
