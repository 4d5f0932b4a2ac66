from .invoice_repository import InvoiceRepositoryProtocol
from .payment_repository import PaymentRepositoryProtocol

__all__ = ["InvoiceRepositoryProtocol", "PaymentRepositoryProtocol"]
