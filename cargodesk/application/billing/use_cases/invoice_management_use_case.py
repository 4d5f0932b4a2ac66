"""
Invoice management use case.

Creates and issues invoices, keeps the overdue flag current and tells the
customer about new and issued invoices.
"""

from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any

import structlog

from cargodesk.application.billing.protocols.invoice_repository import InvoiceRepositoryProtocol
from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.application.notifications.services.customer_notifier import CustomerNotifier
from cargodesk.application.shipping.protocols.shipment_repository import (
    ShipmentRepositoryProtocol,
)
from cargodesk.domain.billing.entities.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    InvoiceType,
)
from cargodesk.domain.billing.exceptions import InvoiceNotFoundError
from cargodesk.domain.common.value_objects.ids import CustomerId, InvoiceId, ShipmentId, UserId
from cargodesk.domain.customers.entities.customer import PaymentTerms
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.domain.notifications.entities.notification import NotificationPriority
from cargodesk.domain.shipping.exceptions import ShipmentNotFoundError

logger = structlog.get_logger(__name__)


class InvoiceManagementUseCase:
    """Use case for invoice operations."""

    def __init__(
        self,
        invoice_repository: InvoiceRepositoryProtocol,
        customer_repository: CustomerRepositoryProtocol,
        shipment_repository: ShipmentRepositoryProtocol,
        customer_notifier: CustomerNotifier,
        default_currency: str,
        default_tax_rate: Decimal,
        company_address: dict[str, Any],
    ) -> None:
        self.invoice_repository = invoice_repository
        self.customer_repository = customer_repository
        self.shipment_repository = shipment_repository
        self.customer_notifier = customer_notifier
        self.default_currency = default_currency
        self.default_tax_rate = default_tax_rate
        self.company_address = company_address

    def create_invoice(
        self,
        customer_id: int,
        items: list[dict[str, Any]],
        created_by: int | None = None,
        shipment_id: int | None = None,
        issue_date: date | None = None,
        due_date: date | None = None,
        currency: str | None = None,
        tax_rate: Decimal | None = None,
        discount_amount: Decimal = Decimal("0"),
        invoice_type: InvoiceType = InvoiceType.STANDARD,
        **optional: Any,  # noqa: ANN401
    ) -> Invoice:
        """
        Create a draft invoice for a customer.

        Args:
            customer_id: Customer being billed
            items: Line item fields; lines without a tax rate take the invoice rate
            created_by: Staff user creating the invoice
            shipment_id: Shipment the invoice covers, if any
            issue_date: Defaults to today
            due_date: Defaults to issue date plus the payment terms
            currency: Defaults to the configured currency
            tax_rate: Defaults to the configured tax rate
            discount_amount: Invoice level discount applied after tax

        Returns:
            The saved draft invoice

        Raises:
            CustomerNotFoundError: If customer is not found
            ShipmentNotFoundError: If the shipment is not found or belongs to another customer
        """
        customer = self.customer_repository.find_by_id(CustomerId(customer_id))
        if not customer:
            raise CustomerNotFoundError(customer_id)

        shipment_ref = None
        if shipment_id:
            shipment = self.shipment_repository.find_by_id(ShipmentId(shipment_id))
            if not shipment or shipment.customer_id != customer.id:
                raise ShipmentNotFoundError(shipment_id)
            shipment_ref = shipment.id

        issued = issue_date or datetime.now(UTC).date()
        payment_terms = PaymentTerms(optional.pop("payment_terms", None) or customer.payment_terms)
        rate = self.default_tax_rate if tax_rate is None else tax_rate

        invoice = Invoice.create(
            invoice_number=self.invoice_repository.next_invoice_number(issued),
            customer_id=customer.id,
            issue_date=issued,
            due_date=due_date or issued + timedelta(days=payment_terms.days),
            currency=currency or self.default_currency,
            items=self._build_items(items, rate),
            discount_amount=discount_amount,
            shipment_id=shipment_ref,
            type=invoice_type,
            tax_rate=rate,
            billing_address=customer.billing_address(),
            company_address=dict(self.company_address),
            payment_terms=payment_terms.value,
            created_by=UserId(created_by) if created_by else None,
            **optional,
        )
        invoice = self.invoice_repository.save(invoice)

        self._notify(
            invoice,
            "invoice_created",
            f"New Invoice - {invoice.invoice_number}",
            f"A new invoice {invoice.invoice_number} for {invoice.currency} "
            f"{invoice.total_amount} has been created.",
            NotificationPriority.MEDIUM,
            created_by,
        )

        logger.info(
            "invoice_created",
            invoice_id=invoice.id.value,
            invoice_number=invoice.invoice_number,
            customer_id=customer_id,
            total_amount=str(invoice.total_amount),
        )
        return invoice

    def get_invoice(self, invoice_id: int, customer_id: int | None = None) -> Invoice:
        """
        Load an invoice. A customer opening their own invoice counts as a view.

        Raises:
            InvoiceNotFoundError: If not found or owned by another customer
        """
        invoice = self._load(invoice_id, customer_id)
        if customer_id is not None:
            invoice.mark_viewed()
            invoice = self.invoice_repository.save(invoice)
            logger.info("invoice_viewed", invoice_id=invoice_id, view_count=invoice.view_count)
        return invoice

    def list_invoices(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: InvoiceStatus | None = None,
        customer_id: int | None = None,
        overdue_only: bool = False,
    ) -> PaginatedResult[Invoice]:
        items, total = self.invoice_repository.search(
            pagination,
            search=search,
            status=status,
            customer_id=CustomerId(customer_id) if customer_id else None,
            overdue_on=datetime.now(UTC).date() if overdue_only else None,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def replace_items(
        self,
        invoice_id: int,
        items: list[dict[str, Any]],
        discount_amount: Decimal | None = None,
    ) -> Invoice:
        """
        Raises:
            InvoiceNotFoundError: If invoice is not found
            BusinessRuleViolationError: If the invoice is no longer a draft
        """
        invoice = self._load(invoice_id)
        invoice.replace_items(self._build_items(items, invoice.tax_rate), discount_amount)
        invoice = self.invoice_repository.save(invoice)

        logger.info(
            "invoice_items_replaced",
            invoice_id=invoice_id,
            item_count=len(invoice.items),
            total_amount=str(invoice.total_amount),
        )
        return invoice

    def send_invoice(self, invoice_id: int, sent_by: int | None = None) -> Invoice:
        invoice = self._load(invoice_id)
        invoice.send(UserId(sent_by) if sent_by else None)
        invoice = self.invoice_repository.save(invoice)

        self._notify(
            invoice,
            "invoice_sent",
            f"Invoice {invoice.invoice_number} Issued",
            f"Invoice {invoice.invoice_number} for {invoice.currency} {invoice.balance_due} "
            f"is due on {invoice.due_date.isoformat()}.",
            NotificationPriority.HIGH,
            sent_by,
        )

        logger.info("invoice_sent", invoice_id=invoice_id, invoice_number=invoice.invoice_number)
        return invoice

    def cancel_invoice(
        self, invoice_id: int, reason: str, cancelled_by: int | None = None
    ) -> Invoice:
        invoice = self._load(invoice_id)
        invoice.cancel(reason, UserId(cancelled_by) if cancelled_by else None)
        invoice = self.invoice_repository.save(invoice)
        logger.info("invoice_cancelled", invoice_id=invoice_id, reason=invoice.cancellation_reason)
        return invoice

    def mark_overdue_invoices(self, today: date | None = None) -> list[Invoice]:
        """
        Flag every sent or viewed invoice that is past its due date.

        Returns:
            Invoices that were moved to overdue
        """
        today = today or datetime.now(UTC).date()
        flagged = []
        for invoice in self.invoice_repository.find_past_due(today):
            if invoice.mark_overdue(today):
                saved = self.invoice_repository.save(invoice)
                self._notify(
                    saved,
                    "invoice_overdue",
                    f"Invoice Overdue - {saved.invoice_number}",
                    f"Invoice {saved.invoice_number} is {saved.days_overdue(today)} days "
                    f"overdue. Balance due: {saved.currency} {saved.balance_due}.",
                    NotificationPriority.URGENT,
                    None,
                )
                flagged.append(saved)

        logger.info("invoices_marked_overdue", count=len(flagged), on=today.isoformat())
        return flagged

    def _load(self, invoice_id: int, customer_id: int | None = None) -> Invoice:
        invoice = self.invoice_repository.find_by_id(InvoiceId(invoice_id))
        if not invoice or (customer_id is not None and invoice.customer_id.value != customer_id):
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    @staticmethod
    def _build_items(items: list[dict[str, Any]], default_tax_rate: Decimal) -> list[InvoiceItem]:
        built = []
        for position, fields in enumerate(items):
            data = dict(fields)
            if data.get("tax_rate") is None:
                data["tax_rate"] = default_tax_rate
            built.append(InvoiceItem.create(sort_order=position, **data))
        return built

    def _notify(
        self,
        invoice: Invoice,
        notification_type: str,
        title: str,
        message: str,
        priority: NotificationPriority,
        acting_user: int | None,
    ) -> None:
        self.customer_notifier.notify_customer(
            customer_id=invoice.customer_id.value,
            notification_type=notification_type,
            title=title,
            message=message,
            priority=priority,
            related_type="invoice",
            related_id=invoice.id.value,
            data={
                "invoice_number": invoice.invoice_number,
                "total_amount": str(invoice.total_amount),
                "currency": invoice.currency,
            },
            created_by=acting_user,
        )
