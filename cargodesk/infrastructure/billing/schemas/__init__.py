from cargodesk.infrastructure.billing.schemas.invoice_schemas import (
    InvoiceCancelRequest,
    InvoiceCreateRequest,
    InvoiceItemRequest,
    InvoiceItemResponse,
    InvoiceItemsReplaceRequest,
    InvoiceResponse,
    OverdueSweepResponse,
)
from cargodesk.infrastructure.billing.schemas.payment_schemas import (
    MarkPaidRequest,
    PaymentCreateRequest,
    PaymentRecordedResponse,
    PaymentResponse,
)

__all__ = [
    "InvoiceCancelRequest",
    "InvoiceCreateRequest",
    "InvoiceItemRequest",
    "InvoiceItemResponse",
    "InvoiceItemsReplaceRequest",
    "InvoiceResponse",
    "MarkPaidRequest",
    "OverdueSweepResponse",
    "PaymentCreateRequest",
    "PaymentRecordedResponse",
    "PaymentResponse",
]
