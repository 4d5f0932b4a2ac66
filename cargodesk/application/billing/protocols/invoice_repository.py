from datetime import date
from decimal import Decimal
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.billing.entities.invoice import Invoice, InvoiceStatus
from cargodesk.domain.common.value_objects.ids import CustomerId, InvoiceId


class InvoiceRepositoryProtocol(Protocol):
    def find_by_id(self, invoice_id: InvoiceId) -> Invoice | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: InvoiceStatus | None = None,
        customer_id: CustomerId | None = None,
        overdue_on: date | None = None,
    ) -> tuple[list[Invoice], int]:
        """Page through invoices. ``overdue_on`` keeps open invoices due before that day."""
        ...

    def find_past_due(self, today: date) -> list[Invoice]:
        """Sent or viewed invoices whose due date is before ``today``."""
        ...

    def total_paid(self, customer_id: CustomerId) -> Decimal:
        """Sum of every payment recorded against the customer's invoices."""
        ...

    def next_invoice_number(self, on: date) -> str: ...

    def save(self, invoice: Invoice) -> Invoice: ...
