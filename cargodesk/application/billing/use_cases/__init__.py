from .invoice_management_use_case import InvoiceManagementUseCase
from .payment_use_case import PaymentUseCase

__all__ = ["InvoiceManagementUseCase", "PaymentUseCase"]
