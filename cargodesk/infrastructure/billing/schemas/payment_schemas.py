from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cargodesk.domain.billing.entities.payment import Payment, PaymentMethod
from cargodesk.infrastructure.billing.schemas.invoice_schemas import InvoiceResponse


class PaymentCreateRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, description="Amount in the invoice currency")
    method: PaymentMethod
    reference_number: str | None = Field(None, max_length=100)
    notes: str | None = None
    payment_date: datetime | None = Field(None, description="Defaults to now")


class MarkPaidRequest(BaseModel):
    method: PaymentMethod = PaymentMethod.OTHER
    reference_number: str | None = Field(None, max_length=100)


class PaymentResponse(BaseModel):
    id: int
    payment_number: str
    invoice_id: int
    customer_id: int
    method: PaymentMethod
    status: str
    amount: Decimal
    currency: str
    payment_date: datetime
    reference_number: str | None
    notes: str | None
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id.value,
            payment_number=payment.payment_number,
            invoice_id=payment.invoice_id.value,
            customer_id=payment.customer_id.value,
            method=payment.method,
            status=payment.status,
            amount=payment.amount,
            currency=payment.currency,
            payment_date=payment.payment_date,
            reference_number=payment.reference_number,
            notes=payment.notes,
            created_at=payment.created_at,
        )


class PaymentRecordedResponse(BaseModel):
    """The payment together with the invoice it settled."""

    payment: PaymentResponse
    invoice: InvoiceResponse
