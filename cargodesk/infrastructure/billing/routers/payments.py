import logging

from fastapi import APIRouter, Depends, status

from cargodesk.application.billing.use_cases import PaymentUseCase
from cargodesk.core import container
from cargodesk.infrastructure.billing.schemas import (
    InvoiceResponse,
    MarkPaidRequest,
    PaymentCreateRequest,
    PaymentRecordedResponse,
    PaymentResponse,
)
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser, customer_scope

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/invoices/{invoice_id}", tags=["payments"])


@router.get("/payments")
def list_payments(
    invoice_id: int,
    current_user: CurrentUser,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> list[PaymentResponse]:
    payments = use_case.list_payments(invoice_id, customer_id=customer_scope(current_user))
    return [PaymentResponse.from_domain(payment) for payment in payments]


@router.post("/payments", status_code=status.HTTP_201_CREATED)
def record_payment(
    invoice_id: int,
    staff: StaffUser,
    request: PaymentCreateRequest,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PaymentRecordedResponse:
    """Apply money received. An invoice whose balance reaches zero becomes paid."""
    invoice, payment = use_case.record_payment(
        invoice_id, recorded_by=staff.id.value, **request.model_dump()
    )
    return PaymentRecordedResponse(
        payment=PaymentResponse.from_domain(payment),
        invoice=InvoiceResponse.from_domain(invoice),
    )


@router.post("/mark-paid")
def mark_invoice_paid(
    invoice_id: int,
    staff: StaffUser,
    request: MarkPaidRequest,
    use_case: PaymentUseCase = Depends(inject_use_case(container.payment_use_case)),
) -> PaymentRecordedResponse:
    """Settle the whole remaining balance in a single payment."""
    invoice, payment = use_case.mark_paid(
        invoice_id,
        method=request.method,
        reference_number=request.reference_number,
        recorded_by=staff.id.value,
    )
    logger.info(f"Invoice {invoice.invoice_number} marked paid by user {staff.id.value}")
    return PaymentRecordedResponse(
        payment=PaymentResponse.from_domain(payment),
        invoice=InvoiceResponse.from_domain(invoice),
    )
