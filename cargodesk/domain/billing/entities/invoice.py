"""
Invoice aggregate.

Totals are always derived from the line items, never set directly:

    line gross     = quantity x unit_price
    line discount  = gross x discount_percentage / 100   (if a percentage is set)
    line total     = gross - line discount
    line tax       = line total x tax_rate / 100          (if a rate is set)

    subtotal       = sum of line totals
    tax_amount     = sum of line taxes
    total_amount   = subtotal + tax_amount - invoice discount_amount
    balance_due    = total_amount - paid_amount

Every stored amount is rounded half-up to cents.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from cargodesk.domain.common.aggregate_root import AggregateRoot
from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    InvoiceId,
    InvoiceItemId,
    ShipmentId,
    UserId,
)
from cargodesk.domain.common.value_objects.money import HUNDRED, ZERO, percent_of, to_money


class InvoiceStatus(StrEnum):
    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceType(StrEnum):
    STANDARD = "standard"
    RECURRING = "recurring"
    CREDIT_NOTE = "credit_note"
    PROFORMA = "proforma"


class InvoiceItemType(StrEnum):
    SERVICE = "service"
    PRODUCT = "product"
    SHIPPING = "shipping"
    TAX = "tax"
    DISCOUNT = "discount"


OPEN_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.VIEWED, InvoiceStatus.OVERDUE})


def _check_rate(value: Decimal, field_name: str) -> Decimal:
    rate = Decimal(value)
    if rate < 0 or rate > HUNDRED:
        raise ValidationError(
            f"{field_name} must be between 0 and 100", field=field_name, value=value
        )
    return rate


@dataclass
class InvoiceItem(Entity[InvoiceItemId]):
    """A priced line on an invoice. Amounts are recalculated on construction."""

    id: InvoiceItemId
    description: str
    quantity: Decimal
    unit_price: Decimal
    type: InvoiceItemType = InvoiceItemType.SERVICE
    item_code: str | None = None
    unit: str = "pcs"
    discount_percentage: Decimal = ZERO
    discount_amount: Decimal = ZERO
    tax_rate: Decimal = ZERO
    tax_amount: Decimal = ZERO
    line_total: Decimal = ZERO
    notes: str | None = None
    sort_order: int = 0

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Item description cannot be empty", field="description")
        self.quantity = Decimal(self.quantity)
        if self.quantity <= 0:
            raise ValidationError(
                "Quantity must be greater than zero", field="quantity", value=self.quantity
            )
        self.unit_price = to_money(self.unit_price)
        if self.unit_price < 0:
            raise ValidationError(
                "Unit price cannot be negative", field="unit_price", value=self.unit_price
            )
        self.discount_percentage = _check_rate(self.discount_percentage, "discount_percentage")
        self.tax_rate = _check_rate(self.tax_rate, "tax_rate")
        self.calculate()

    @property
    def gross_amount(self) -> Decimal:
        return to_money(self.quantity * self.unit_price)

    def calculate(self) -> None:
        """Derive discount, line total and tax from quantity, price and rates."""
        gross = self.gross_amount
        if self.discount_percentage > 0:
            self.discount_amount = percent_of(gross, self.discount_percentage)
        else:
            self.discount_amount = to_money(self.discount_amount)

        if self.discount_amount < 0 or self.discount_amount > gross:
            raise ValidationError(
                "Discount must be between zero and the line amount",
                field="discount_amount",
                value=self.discount_amount,
            )

        self.line_total = to_money(gross - self.discount_amount)

        if self.tax_rate > 0:
            self.tax_amount = percent_of(self.line_total, self.tax_rate)
        else:
            self.tax_amount = to_money(self.tax_amount)

    @classmethod
    def create(
        cls,
        description: str,
        quantity: Decimal,
        unit_price: Decimal,
        sort_order: int = 0,
        **optional: Any,  # noqa: ANN401
    ) -> "InvoiceItem":
        return cls(
            id=InvoiceItemId.generate(),
            description=description.strip(),
            quantity=quantity,
            unit_price=unit_price,
            sort_order=sort_order,
            **optional,
        )


@dataclass
class Invoice(AggregateRoot[InvoiceId]):
    """
    A billing document for a customer, optionally tied to a shipment.

    Business Rules:
    - Due date cannot precede the issue date
    - Items can only be changed while the invoice is a draft
    - A payment must be positive and cannot exceed the balance due
    - Paid invoices cannot be cancelled; cancelled invoices cannot be paid
    """

    id: InvoiceId
    invoice_number: str
    customer_id: CustomerId
    issue_date: date
    due_date: date
    currency: str
    billing_address: dict[str, Any] = field(default_factory=dict)
    company_address: dict[str, Any] = field(default_factory=dict)
    shipment_id: ShipmentId | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    type: InvoiceType = InvoiceType.STANDARD
    paid_date: date | None = None
    exchange_rate: Decimal = Decimal("1")
    subtotal: Decimal = ZERO
    tax_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    balance_due: Decimal = ZERO
    tax_rate: Decimal = ZERO
    tax_type: str | None = None
    notes: str | None = None
    terms_conditions: str | None = None
    payment_terms: str | None = None
    created_by: UserId | None = None
    sent_by: UserId | None = None
    sent_at: datetime | None = None
    viewed_at: datetime | None = None
    view_count: int = 0
    cancelled_at: datetime | None = None
    cancelled_by: UserId | None = None
    cancellation_reason: str | None = None
    items: list[InvoiceItem] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.due_date < self.issue_date:
            raise ValidationError(
                "Due date cannot be before the issue date", field="due_date", value=self.due_date
            )
        if len(self.currency) != 3:  # noqa: PLR2004
            raise ValidationError("Currency must be a 3 letter code", field="currency")
        self.tax_rate = _check_rate(self.tax_rate, "tax_rate")
        self.discount_amount = to_money(self.discount_amount)
        self.paid_amount = to_money(self.paid_amount)
        if self.discount_amount < 0:
            raise ValidationError("Discount cannot be negative", field="discount_amount")

    # Totals

    def calculate_totals(self) -> None:
        """Recompute subtotal, tax, total and balance from the items."""
        self.subtotal = to_money(sum((item.line_total for item in self.items), ZERO))
        self.tax_amount = to_money(sum((item.tax_amount for item in self.items), ZERO))
        total = self.subtotal + self.tax_amount - self.discount_amount
        if total < 0:
            raise ValidationError(
                "Invoice discount cannot exceed the invoice amount",
                field="discount_amount",
                value=self.discount_amount,
            )
        self.total_amount = to_money(total)
        self.balance_due = to_money(self.total_amount - self.paid_amount)

    def replace_items(
        self, items: list[InvoiceItem], discount_amount: Decimal | None = None
    ) -> None:
        """
        Swap the line items of a draft invoice and recompute totals.

        Raises:
            BusinessRuleViolationError: If the invoice is no longer a draft
        """
        if self.status != InvoiceStatus.DRAFT:
            raise BusinessRuleViolationError(
                "draft_only_edit", "Only draft invoices can have their items changed"
            )
        self._set_items(items)
        if discount_amount is not None:
            self.discount_amount = to_money(discount_amount)
        self.calculate_totals()

    def _set_items(self, items: list[InvoiceItem]) -> None:
        if not items:
            raise ValidationError("An invoice needs at least one item", field="items")
        for position, item in enumerate(items):
            item.sort_order = position
        self.items = items

    # Lifecycle

    def send(self, sent_by: UserId | None, at: datetime | None = None) -> None:
        """
        Issue the invoice to the customer.

        Raises:
            InvalidStatusTransitionError: If the invoice is paid or cancelled
        """
        if self.status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED):
            raise InvalidStatusTransitionError("invoice", self.status, InvoiceStatus.SENT)
        if self.status == InvoiceStatus.DRAFT:
            self.status = InvoiceStatus.SENT
        self.sent_by = sent_by
        self.sent_at = at or datetime.now(UTC)

    def mark_viewed(self, at: datetime | None = None) -> None:
        """Count a view by the customer. The first view of a sent invoice marks it viewed."""
        self.view_count += 1
        if self.viewed_at is None:
            self.viewed_at = at or datetime.now(UTC)
        if self.status == InvoiceStatus.SENT:
            self.status = InvoiceStatus.VIEWED

    def record_payment(self, amount: Decimal, paid_on: date | None = None) -> None:
        """
        Apply a payment to the balance.

        Raises:
            BusinessRuleViolationError: If the invoice cannot take payments or
                the amount is not within (0, balance_due]
        """
        if self.status not in OPEN_STATUSES:
            raise BusinessRuleViolationError(
                "payable_status", f"Cannot record a payment on a {self.status} invoice"
            )
        amount = to_money(amount)
        if amount <= 0:
            raise BusinessRuleViolationError("positive_payment", "Payment amount must be positive")
        if amount > self.balance_due:
            raise BusinessRuleViolationError(
                "payment_within_balance",
                f"Payment of {amount} exceeds the balance due of {self.balance_due}",
            )

        self.paid_amount = to_money(self.paid_amount + amount)
        self.balance_due = to_money(self.total_amount - self.paid_amount)
        if self.balance_due == 0:
            self.status = InvoiceStatus.PAID
            self.paid_date = paid_on or datetime.now(UTC).date()

    def mark_paid(self, paid_on: date | None = None) -> Decimal:
        """Settle the full remaining balance. Returns the amount settled."""
        amount = self.balance_due
        self.record_payment(amount, paid_on)
        return amount

    def cancel(self, reason: str, cancelled_by: UserId | None, at: datetime | None = None) -> None:
        """
        Void the invoice.

        Raises:
            ValidationError: If no reason is given
            InvalidStatusTransitionError: If the invoice is paid or already cancelled
        """
        if not reason or not reason.strip():
            raise ValidationError("A cancellation reason is required", field="reason")
        if self.status in (InvoiceStatus.PAID, InvoiceStatus.CANCELLED):
            raise InvalidStatusTransitionError("invoice", self.status, InvoiceStatus.CANCELLED)
        self.status = InvoiceStatus.CANCELLED
        self.cancelled_at = at or datetime.now(UTC)
        self.cancelled_by = cancelled_by
        self.cancellation_reason = reason.strip()

    def is_overdue(self, today: date | None = None) -> bool:
        if self.status in (InvoiceStatus.DRAFT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED):
            return False
        today = today or datetime.now(UTC).date()
        return self.due_date < today

    def days_overdue(self, today: date | None = None) -> int:
        today = today or datetime.now(UTC).date()
        if not self.is_overdue(today):
            return 0
        return (today - self.due_date).days

    def mark_overdue(self, today: date | None = None) -> bool:
        """Flag a sent or viewed invoice past its due date. Returns whether it changed."""
        if self.status in (InvoiceStatus.SENT, InvoiceStatus.VIEWED) and self.is_overdue(today):
            self.status = InvoiceStatus.OVERDUE
            return True
        return False

    @classmethod
    def create(
        cls,
        invoice_number: str,
        customer_id: CustomerId,
        issue_date: date,
        due_date: date,
        currency: str,
        items: list[InvoiceItem],
        discount_amount: Decimal = ZERO,
        **optional: Any,  # noqa: ANN401
    ) -> "Invoice":
        """Create a draft invoice with computed totals (ID will be 0 until persisted)."""
        invoice = cls(
            id=InvoiceId.generate(),
            invoice_number=invoice_number,
            customer_id=customer_id,
            issue_date=issue_date,
            due_date=due_date,
            currency=currency.upper(),
            discount_amount=discount_amount,
            **optional,
        )
        invoice._set_items(items)
        invoice.calculate_totals()
        return invoice
