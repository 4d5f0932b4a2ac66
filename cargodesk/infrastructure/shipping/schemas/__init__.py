from cargodesk.infrastructure.shipping.schemas.rate_schemas import (
    RateDiscountResponse,
    RateQuoteRequest,
    RateQuoteResponse,
    RateResponse,
)
from cargodesk.infrastructure.shipping.schemas.shipment_schemas import (
    PublicTrackingResponse,
    ShipmentCancelRequest,
    ShipmentCreateRequest,
    ShipmentItemSchema,
    ShipmentResponse,
    ShipmentStatusUpdateRequest,
    ShipmentUpdateRequest,
    TrackingEventResponse,
)

__all__ = [
    "PublicTrackingResponse",
    "RateDiscountResponse",
    "RateQuoteRequest",
    "RateQuoteResponse",
    "RateResponse",
    "ShipmentCancelRequest",
    "ShipmentCreateRequest",
    "ShipmentItemSchema",
    "ShipmentResponse",
    "ShipmentStatusUpdateRequest",
    "ShipmentUpdateRequest",
    "TrackingEventResponse",
]
