import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.billing.use_cases import InvoiceManagementUseCase
from cargodesk.core import container
from cargodesk.domain.billing.entities.invoice import InvoiceStatus
from cargodesk.infrastructure.billing.schemas import (
    InvoiceCancelRequest,
    InvoiceCreateRequest,
    InvoiceItemsReplaceRequest,
    InvoiceResponse,
    OverdueSweepResponse,
)
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser, customer_scope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("")
def list_invoices(
    current_user: CurrentUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Invoice number or customer name"),
    invoice_status: InvoiceStatus | None = Query(None, alias="status"),
    customer_id: int | None = Query(None, description="Staff only: one customer's invoices"),
    overdue_only: bool = Query(False, description="Open invoices past their due date"),
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> PaginatedResponse[InvoiceResponse]:
    scope = customer_scope(current_user)
    result = use_case.list_invoices(
        pagination,
        search=search,
        status=invoice_status,
        customer_id=scope if scope is not None else customer_id,
        overdue_only=overdue_only,
    )
    return PaginatedResponse.from_result(result, InvoiceResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_invoice(
    staff: StaffUser,
    request: InvoiceCreateRequest,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> InvoiceResponse:
    """Draft an invoice. Numbers, due date and totals are filled in automatically."""
    data = request.model_dump(exclude={"items", "type"}, exclude_none=True)
    invoice = use_case.create_invoice(
        items=[item.model_dump() for item in request.items],
        invoice_type=request.type,
        created_by=staff.id.value,
        **data,
    )
    return InvoiceResponse.from_domain(invoice)


@router.post("/mark-overdue")
def mark_overdue_invoices(
    staff: StaffUser,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> OverdueSweepResponse:
    """Flag every sent or viewed invoice that is past due."""
    flagged = use_case.mark_overdue_invoices()
    logger.info(f"Overdue sweep by user {staff.id.value} flagged {len(flagged)} invoices")
    return OverdueSweepResponse(
        flagged=len(flagged),
        invoice_numbers=[invoice.invoice_number for invoice in flagged],
    )


@router.get("/{invoice_id}")
def get_invoice(
    invoice_id: int,
    current_user: CurrentUser,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> InvoiceResponse:
    """Get an invoice. Customers opening their own invoice mark it viewed."""
    invoice = use_case.get_invoice(invoice_id, customer_id=customer_scope(current_user))
    return InvoiceResponse.from_domain(invoice)


@router.put("/{invoice_id}/items")
def replace_invoice_items(
    invoice_id: int,
    staff: StaffUser,
    request: InvoiceItemsReplaceRequest,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> InvoiceResponse:
    """Replace the lines of a draft invoice and recompute its totals."""
    invoice = use_case.replace_items(
        invoice_id,
        [item.model_dump() for item in request.items],
        discount_amount=request.discount_amount,
    )
    return InvoiceResponse.from_domain(invoice)


@router.post("/{invoice_id}/send")
def send_invoice(
    invoice_id: int,
    staff: StaffUser,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> InvoiceResponse:
    return InvoiceResponse.from_domain(use_case.send_invoice(invoice_id, sent_by=staff.id.value))


@router.post("/{invoice_id}/cancel")
def cancel_invoice(
    invoice_id: int,
    staff: StaffUser,
    request: InvoiceCancelRequest,
    use_case: InvoiceManagementUseCase = Depends(
        inject_use_case(container.invoice_management_use_case)
    ),
) -> InvoiceResponse:
    invoice = use_case.cancel_invoice(invoice_id, request.reason, cancelled_by=staff.id.value)
    return InvoiceResponse.from_domain(invoice)
