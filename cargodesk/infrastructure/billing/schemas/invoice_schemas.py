from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from cargodesk.domain.billing.entities.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceItemType,
    InvoiceStatus,
    InvoiceType,
)
from cargodesk.domain.customers.entities.customer import PaymentTerms


class InvoiceItemRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    quantity: Decimal = Field(Decimal("1"), gt=0)
    unit_price: Decimal = Field(..., ge=0)
    type: InvoiceItemType = InvoiceItemType.SERVICE
    item_code: str | None = Field(None, max_length=50)
    unit: str = Field("pcs", max_length=20)
    discount_percentage: Decimal = Field(Decimal("0"), ge=0, le=100)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    tax_rate: Decimal | None = Field(
        None, ge=0, le=100, description="Defaults to the invoice tax rate"
    )
    notes: str | None = None


class InvoiceCreateRequest(BaseModel):
    """Schema for drafting an invoice. Totals are always computed."""

    customer_id: int
    shipment_id: int | None = None
    type: InvoiceType = InvoiceType.STANDARD
    issue_date: date | None = None
    due_date: date | None = Field(None, description="Defaults to the customer's payment terms")
    currency: str | None = Field(None, min_length=3, max_length=3)
    tax_rate: Decimal | None = Field(None, ge=0, le=100)
    tax_type: str | None = Field(None, max_length=20)
    discount_amount: Decimal = Field(Decimal("0"), ge=0)
    notes: str | None = None
    terms_conditions: str | None = None
    payment_terms: PaymentTerms | None = Field(
        None, description="Overrides the customer's payment terms and due date"
    )
    items: list[InvoiceItemRequest] = Field(..., min_length=1)


class InvoiceItemsReplaceRequest(BaseModel):
    items: list[InvoiceItemRequest] = Field(..., min_length=1)
    discount_amount: Decimal | None = Field(None, ge=0)


class InvoiceCancelRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class InvoiceItemResponse(BaseModel):
    id: int
    description: str
    item_code: str | None
    type: InvoiceItemType
    quantity: Decimal
    unit: str
    unit_price: Decimal
    discount_percentage: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    line_total: Decimal
    notes: str | None
    sort_order: int

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemResponse":
        return cls(
            id=item.id.value,
            description=item.description,
            item_code=item.item_code,
            type=item.type,
            quantity=item.quantity,
            unit=item.unit,
            unit_price=item.unit_price,
            discount_percentage=item.discount_percentage,
            discount_amount=item.discount_amount,
            tax_rate=item.tax_rate,
            tax_amount=item.tax_amount,
            line_total=item.line_total,
            notes=item.notes,
            sort_order=item.sort_order,
        )


class InvoiceResponse(BaseModel):
    id: int
    invoice_number: str
    customer_id: int
    shipment_id: int | None
    status: InvoiceStatus
    type: InvoiceType
    issue_date: date
    due_date: date
    paid_date: date | None
    currency: str
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_due: Decimal
    tax_rate: Decimal
    tax_type: str | None
    billing_address: dict[str, Any]
    company_address: dict[str, Any]
    notes: str | None
    terms_conditions: str | None
    payment_terms: str | None
    is_overdue: bool
    days_overdue: int
    sent_at: datetime | None
    viewed_at: datetime | None
    view_count: int
    cancelled_at: datetime | None
    cancellation_reason: str | None
    items: list[InvoiceItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponse":
        return cls(
            id=invoice.id.value,
            invoice_number=invoice.invoice_number,
            customer_id=invoice.customer_id.value,
            shipment_id=invoice.shipment_id.value if invoice.shipment_id else None,
            status=invoice.status,
            type=invoice.type,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            paid_date=invoice.paid_date,
            currency=invoice.currency,
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount,
            discount_amount=invoice.discount_amount,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            balance_due=invoice.balance_due,
            tax_rate=invoice.tax_rate,
            tax_type=invoice.tax_type,
            billing_address=invoice.billing_address,
            company_address=invoice.company_address,
            notes=invoice.notes,
            terms_conditions=invoice.terms_conditions,
            payment_terms=invoice.payment_terms,
            is_overdue=invoice.is_overdue(),
            days_overdue=invoice.days_overdue(),
            sent_at=invoice.sent_at,
            viewed_at=invoice.viewed_at,
            view_count=invoice.view_count,
            cancelled_at=invoice.cancelled_at,
            cancellation_reason=invoice.cancellation_reason,
            items=[InvoiceItemResponse.from_domain(item) for item in invoice.items],
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class OverdueSweepResponse(BaseModel):
    flagged: int
    invoice_numbers: list[str]
