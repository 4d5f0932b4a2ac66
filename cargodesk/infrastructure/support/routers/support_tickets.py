import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.support.use_cases import SupportTicketUseCase
from cargodesk.core import container
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.identity.entities.user import User
from cargodesk.domain.support.entities.support_ticket import (
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)
from cargodesk.exceptions import PermissionDeniedError
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser, customer_scope
from cargodesk.infrastructure.support.schemas import (
    TicketAssignRequest,
    TicketCreateRequest,
    TicketRatingRequest,
    TicketReplyRequest,
    TicketResponse,
    TicketStatusRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/support-tickets", tags=["support"])


def _render(ticket: SupportTicket, user: User) -> TicketResponse:
    """Customers never see internal notes."""
    if user.is_customer:
        return TicketResponse.for_customer(ticket)
    return TicketResponse.from_domain(ticket)


@router.get("")
def list_tickets(
    current_user: CurrentUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Ticket number, subject or description"),
    ticket_status: TicketStatus | None = Query(None, alias="status"),
    priority: TicketPriority | None = None,
    category: TicketCategory | None = None,
    assigned_to: int | None = None,
    customer_id: int | None = Query(None, description="Staff only: one customer's tickets"),
    overdue_only: bool = Query(False, description="Open tickets past their response SLA"),
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> PaginatedResponse[TicketResponse]:
    scope = customer_scope(current_user)
    result = use_case.list_tickets(
        pagination,
        search=search,
        status=ticket_status,
        priority=priority,
        category=category,
        assigned_to=assigned_to,
        customer_id=scope if scope is not None else customer_id,
        overdue_only=overdue_only,
    )
    return PaginatedResponse.from_result(
        result, lambda ticket: _render(ticket, current_user)
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_ticket(
    current_user: CurrentUser,
    request: TicketCreateRequest,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    scope = customer_scope(current_user)
    customer_id = scope if scope is not None else request.customer_id
    if customer_id is None:
        raise ValidationError("A customer is required", field="customer_id")

    ticket = use_case.create_ticket(
        customer_id=customer_id,
        subject=request.subject,
        description=request.description,
        created_by=current_user.id.value,
        priority=request.priority,
        category=request.category,
        source=request.source,
        tags=request.tags,
        assigned_to=None if current_user.is_customer else request.assigned_to,
    )
    return _render(ticket, current_user)


@router.get("/{ticket_id}")
def get_ticket(
    ticket_id: int,
    current_user: CurrentUser,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    ticket = use_case.get_ticket(ticket_id, customer_id=customer_scope(current_user))
    return _render(ticket, current_user)


@router.post("/{ticket_id}/replies", status_code=status.HTTP_201_CREATED)
def add_reply(
    ticket_id: int,
    current_user: CurrentUser,
    request: TicketReplyRequest,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    """Post on the thread. Internal notes are for staff only."""
    ticket = use_case.add_reply(
        ticket_id,
        user_id=current_user.id.value,
        message=request.message,
        from_staff=current_user.is_staff,
        is_internal=request.is_internal,
        customer_id=customer_scope(current_user),
    )
    return _render(ticket, current_user)


@router.post("/{ticket_id}/assign")
def assign_ticket(
    ticket_id: int,
    staff: StaffUser,
    request: TicketAssignRequest,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    return TicketResponse.from_domain(use_case.assign(ticket_id, request.assigned_to))


@router.post("/{ticket_id}/status")
def change_ticket_status(
    ticket_id: int,
    staff: StaffUser,
    request: TicketStatusRequest,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    ticket = use_case.change_status(ticket_id, request.status)
    logger.info(f"Ticket {ticket.ticket_number} set to {ticket.status} by user {staff.id.value}")
    return TicketResponse.from_domain(ticket)


@router.post("/{ticket_id}/resolve")
def resolve_ticket(
    ticket_id: int,
    staff: StaffUser,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    return TicketResponse.from_domain(use_case.resolve(ticket_id))


@router.post("/{ticket_id}/close")
def close_ticket(
    ticket_id: int,
    staff: StaffUser,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    return TicketResponse.from_domain(use_case.close(ticket_id))


@router.post("/{ticket_id}/rating")
def rate_ticket(
    ticket_id: int,
    current_user: CurrentUser,
    request: TicketRatingRequest,
    use_case: SupportTicketUseCase = Depends(inject_use_case(container.support_ticket_use_case)),
) -> TicketResponse:
    """Customers rate their own resolved or closed tickets."""
    customer_id = customer_scope(current_user)
    if customer_id is None:
        raise PermissionDeniedError("Only customers can rate tickets")
    ticket = use_case.rate(ticket_id, customer_id, request.rating, request.feedback)
    return TicketResponse.for_customer(ticket)
