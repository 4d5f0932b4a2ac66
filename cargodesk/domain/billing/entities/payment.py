"""Payment entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.ids import CustomerId, InvoiceId, PaymentId, UserId
from cargodesk.domain.common.value_objects.money import to_money


class PaymentMethod(StrEnum):
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    MOBILE_MONEY = "mobile_money"
    CASH = "cash"
    CHECK = "check"
    OTHER = "other"


@dataclass
class Payment(Entity[PaymentId]):
    """Money received against an invoice. Payments are recorded once settled."""

    id: PaymentId
    payment_number: str
    invoice_id: InvoiceId
    customer_id: CustomerId
    method: PaymentMethod
    amount: Decimal
    currency: str
    payment_date: datetime
    status: str = "completed"
    reference_number: str | None = None
    notes: str | None = None
    created_by: UserId | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        self.amount = to_money(self.amount)
        if self.amount <= 0:
            raise ValidationError("Payment amount must be positive", field="amount")

    @classmethod
    def create(
        cls,
        payment_number: str,
        invoice_id: InvoiceId,
        customer_id: CustomerId,
        method: PaymentMethod,
        amount: Decimal,
        currency: str,
        payment_date: datetime,
        reference_number: str | None = None,
        notes: str | None = None,
        created_by: UserId | None = None,
    ) -> "Payment":
        return cls(
            id=PaymentId.generate(),
            payment_number=payment_number,
            invoice_id=invoice_id,
            customer_id=customer_id,
            method=method,
            amount=amount,
            currency=currency,
            payment_date=payment_date,
            reference_number=reference_number,
            notes=notes,
            created_by=created_by,
        )
