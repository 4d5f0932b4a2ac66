from .invoice import Invoice, InvoiceItem, InvoiceItemType, InvoiceStatus, InvoiceType
from .payment import Payment, PaymentMethod

__all__ = [
    "Invoice",
    "InvoiceItem",
    "InvoiceItemType",
    "InvoiceStatus",
    "InvoiceType",
    "Payment",
    "PaymentMethod",
]
