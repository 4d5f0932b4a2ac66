"""Tests for the Invoice aggregate."""

from datetime import date
from decimal import Decimal

import pytest

from cargodesk.domain.billing.entities.invoice import Invoice, InvoiceItem, InvoiceStatus
from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import CustomerId, UserId


def _items() -> list[InvoiceItem]:
    return [
        InvoiceItem.create("Freight DAR-ARK", Decimal("2"), Decimal("50000"), tax_rate=18),
        InvoiceItem.create(
            "Handling", Decimal("1"), Decimal("20000"), discount_percentage=10, tax_rate=18
        ),
    ]


def _invoice(**overrides: object) -> Invoice:
    fields: dict[str, object] = {
        "invoice_number": "INV-2026-000001",
        "customer_id": CustomerId(1),
        "issue_date": date(2026, 10, 1),
        "due_date": date(2026, 10, 31),
        "currency": "tzs",
        "items": _items(),
        "discount_amount": Decimal("1240"),
        **overrides,
    }
    return Invoice.create(**fields)  # type: ignore[arg-type]


class TestInvoiceItem:
    """Test suite for invoice line calculations."""

    def test_percentage_discount_then_tax(self) -> None:
        item = InvoiceItem.create(
            "Handling", Decimal("1"), Decimal("20000"), discount_percentage=10, tax_rate=18
        )
        assert item.discount_amount == Decimal("2000.00")
        assert item.line_total == Decimal("18000.00")
        assert item.tax_amount == Decimal("3240.00")

    def test_fractional_quantity(self) -> None:
        item = InvoiceItem.create("Storage", Decimal("2.5"), Decimal("0.99"))
        assert item.line_total == Decimal("2.48")

    def test_flat_discount_larger_than_line(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceItem.create("Fee", Decimal("1"), Decimal("10"), discount_amount=Decimal("11"))

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceItem.create("Fee", Decimal("0"), Decimal("10"))

    def test_tax_rate_bounds(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceItem.create("Fee", Decimal("1"), Decimal("10"), tax_rate=101)


class TestInvoiceTotals:
    """Test suite for invoice totals."""

    def test_totals_from_items(self) -> None:
        invoice = _invoice()

        assert invoice.subtotal == Decimal("118000.00")
        assert invoice.tax_amount == Decimal("21240.00")
        assert invoice.total_amount == Decimal("138000.00")
        assert invoice.balance_due == Decimal("138000.00")
        assert invoice.currency == "TZS"
        assert [item.sort_order for item in invoice.items] == [0, 1]

    def test_discount_cannot_exceed_amount(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _invoice(discount_amount=Decimal("200000"))
        assert exc_info.value.field == "discount_amount"

    def test_due_before_issue(self) -> None:
        with pytest.raises(ValidationError):
            _invoice(due_date=date(2026, 9, 30))

    def test_needs_items(self) -> None:
        with pytest.raises(ValidationError):
            _invoice(items=[])

    def test_replace_items_on_draft(self) -> None:
        invoice = _invoice()

        invoice.replace_items(
            [InvoiceItem.create("Freight", Decimal("1"), Decimal("10000"), tax_rate=18)],
            discount_amount=Decimal("0"),
        )

        assert invoice.total_amount == Decimal("11800.00")

    def test_replace_items_after_send(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))

        with pytest.raises(BusinessRuleViolationError):
            invoice.replace_items(_items())


class TestInvoicePayments:
    """Test suite for payments against an invoice."""

    def test_partial_then_full_payment(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))

        invoice.record_payment(Decimal("38000"))
        assert invoice.balance_due == Decimal("100000.00")
        assert invoice.status == InvoiceStatus.SENT

        invoice.record_payment(Decimal("100000"), paid_on=date(2026, 10, 20))
        assert invoice.status == InvoiceStatus.PAID
        assert invoice.paid_date == date(2026, 10, 20)
        assert invoice.balance_due == Decimal("0.00")

    def test_overpayment(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))

        with pytest.raises(BusinessRuleViolationError):
            invoice.record_payment(Decimal("138000.01"))

    def test_draft_cannot_be_paid(self) -> None:
        with pytest.raises(BusinessRuleViolationError):
            _invoice().record_payment(Decimal("1"))

    def test_mark_paid_settles_balance(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))
        invoice.record_payment(Decimal("38000"))

        assert invoice.mark_paid() == Decimal("100000.00")
        assert invoice.status == InvoiceStatus.PAID


class TestInvoiceLifecycle:
    """Test suite for send, view, cancel and overdue."""

    def test_first_view_marks_viewed(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))

        invoice.mark_viewed()
        invoice.mark_viewed()

        assert invoice.status == InvoiceStatus.VIEWED
        assert invoice.view_count == 2

    def test_cancel_needs_reason(self) -> None:
        with pytest.raises(ValidationError):
            _invoice().cancel("  ", UserId(1))

    def test_paid_invoice_cannot_be_cancelled(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))
        invoice.mark_paid()

        with pytest.raises(InvalidStatusTransitionError):
            invoice.cancel("Duplicate", UserId(1))

    def test_overdue(self) -> None:
        invoice = _invoice()
        invoice.send(UserId(1))

        assert invoice.mark_overdue(date(2026, 10, 31)) is False
        assert invoice.mark_overdue(date(2026, 11, 3)) is True
        assert invoice.status == InvoiceStatus.OVERDUE
        assert invoice.days_overdue(date(2026, 11, 3)) == 3

    def test_draft_is_never_overdue(self) -> None:
        assert _invoice().is_overdue(date(2027, 1, 1)) is False
