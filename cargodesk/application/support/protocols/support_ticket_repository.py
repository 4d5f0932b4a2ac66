from datetime import date, datetime
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId, SupportTicketId, UserId
from cargodesk.domain.support.entities.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)


class SupportTicketRepositoryProtocol(Protocol):
    def find_by_id(self, ticket_id: SupportTicketId) -> SupportTicket | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: TicketStatus | None = None,
        priority: TicketPriority | None = None,
        category: TicketCategory | None = None,
        assigned_to: UserId | None = None,
        customer_id: CustomerId | None = None,
        overdue_at: datetime | None = None,
    ) -> tuple[list[SupportTicket], int]:
        """Page through tickets. ``overdue_at`` keeps open tickets past their SLA at that time."""
        ...

    def next_ticket_number(self, on: date) -> str: ...

    def save(self, ticket: SupportTicket) -> SupportTicket: ...
