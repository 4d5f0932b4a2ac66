from datetime import date
from typing import Protocol

from cargodesk.domain.billing.entities.payment import Payment
from cargodesk.domain.common.value_objects.ids import InvoiceId


class PaymentRepositoryProtocol(Protocol):
    def list_for_invoice(self, invoice_id: InvoiceId) -> list[Payment]: ...

    def next_payment_number(self, on: date) -> str: ...

    def save(self, payment: Payment) -> Payment: ...
