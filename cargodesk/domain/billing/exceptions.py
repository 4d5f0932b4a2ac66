"""Billing domain exceptions."""

from cargodesk.domain.common.exceptions import EntityNotFoundError


class InvoiceNotFoundError(EntityNotFoundError):
    """Raised when an invoice cannot be found."""

    def __init__(self, invoice_id: int) -> None:
        super().__init__("Invoice", invoice_id)
