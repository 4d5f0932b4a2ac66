"""Recording money received against invoices."""

from datetime import UTC, datetime
from decimal import Decimal

import structlog

from cargodesk.application.billing.protocols.invoice_repository import InvoiceRepositoryProtocol
from cargodesk.application.billing.protocols.payment_repository import PaymentRepositoryProtocol
from cargodesk.application.notifications.services.customer_notifier import CustomerNotifier
from cargodesk.domain.billing.entities.invoice import Invoice
from cargodesk.domain.billing.entities.payment import Payment, PaymentMethod
from cargodesk.domain.billing.exceptions import InvoiceNotFoundError
from cargodesk.domain.common.value_objects.ids import InvoiceId, UserId
from cargodesk.domain.notifications.entities.notification import NotificationPriority

logger = structlog.get_logger(__name__)


class PaymentUseCase:
    """Use case for invoice payments."""

    def __init__(
        self,
        invoice_repository: InvoiceRepositoryProtocol,
        payment_repository: PaymentRepositoryProtocol,
        customer_notifier: CustomerNotifier,
    ) -> None:
        self.invoice_repository = invoice_repository
        self.payment_repository = payment_repository
        self.customer_notifier = customer_notifier

    def record_payment(
        self,
        invoice_id: int,
        amount: Decimal,
        method: PaymentMethod,
        reference_number: str | None = None,
        notes: str | None = None,
        payment_date: datetime | None = None,
        recorded_by: int | None = None,
    ) -> tuple[Invoice, Payment]:
        """
        Apply a payment to an invoice and keep a payment record.

        Args:
            invoice_id: Invoice being paid
            amount: Amount received, in the invoice currency
            method: How the money was received
            reference_number: Bank or gateway reference
            notes: Free text
            payment_date: When the money arrived, defaults to now
            recorded_by: Staff user recording the payment

        Returns:
            Tuple of (updated invoice, payment record)

        Raises:
            InvoiceNotFoundError: If invoice is not found
            BusinessRuleViolationError: If the invoice is not payable or the amount
                is not positive or exceeds the balance due
        """
        invoice = self._load(invoice_id)
        paid_at = payment_date or datetime.now(UTC)

        invoice.record_payment(amount, paid_at.date())
        payment = Payment.create(
            payment_number=self.payment_repository.next_payment_number(paid_at.date()),
            invoice_id=invoice.id,
            customer_id=invoice.customer_id,
            method=method,
            amount=amount,
            currency=invoice.currency,
            payment_date=paid_at,
            reference_number=reference_number,
            notes=notes,
            created_by=UserId(recorded_by) if recorded_by else None,
        )

        invoice = self.invoice_repository.save(invoice)
        payment = self.payment_repository.save(payment)
        self._notify_payment(invoice, payment, recorded_by)

        logger.info(
            "payment_recorded",
            invoice_id=invoice_id,
            payment_number=payment.payment_number,
            amount=str(payment.amount),
            balance_due=str(invoice.balance_due),
            status=invoice.status,
        )
        return invoice, payment

    def mark_paid(
        self,
        invoice_id: int,
        method: PaymentMethod = PaymentMethod.OTHER,
        reference_number: str | None = None,
        recorded_by: int | None = None,
    ) -> tuple[Invoice, Payment]:
        """Settle the whole remaining balance in one payment."""
        invoice = self._load(invoice_id)
        return self.record_payment(
            invoice_id,
            invoice.balance_due,
            method,
            reference_number=reference_number,
            notes="Marked as paid",
            recorded_by=recorded_by,
        )

    def list_payments(self, invoice_id: int, customer_id: int | None = None) -> list[Payment]:
        invoice = self._load(invoice_id)
        if customer_id is not None and invoice.customer_id.value != customer_id:
            raise InvoiceNotFoundError(invoice_id)
        return self.payment_repository.list_for_invoice(invoice.id)

    def _load(self, invoice_id: int) -> Invoice:
        invoice = self.invoice_repository.find_by_id(InvoiceId(invoice_id))
        if not invoice:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def _notify_payment(self, invoice: Invoice, payment: Payment, acting_user: int | None) -> None:
        self.customer_notifier.notify_customer(
            customer_id=invoice.customer_id.value,
            notification_type="payment_received",
            title=f"Payment Received - {invoice.invoice_number}",
            message=(
                f"We received your payment of {payment.currency} {payment.amount} "
                f"for invoice {invoice.invoice_number}. "
                f"Balance due: {invoice.currency} {invoice.balance_due}."
            ),
            priority=NotificationPriority.MEDIUM,
            related_type="invoice",
            related_id=invoice.id.value,
            data={"payment_number": payment.payment_number, "amount": str(payment.amount)},
            created_by=acting_user,
        )
