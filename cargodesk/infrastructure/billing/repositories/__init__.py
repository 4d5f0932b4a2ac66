from .invoice_repository import InvoiceRepository
from .payment_repository import PaymentRepository

__all__ = ["InvoiceRepository", "PaymentRepository"]
