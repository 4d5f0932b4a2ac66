"""Common value objects shared across all domain modules."""

from .geo_point import GeoPoint
from .ids import (
    CustomerId,
    CustomsDeclarationId,
    CustomsItemId,
    DeliveryRouteId,
    DriverId,
    InvoiceId,
    InvoiceItemId,
    NotificationId,
    PaymentId,
    RouteStopId,
    ShipmentId,
    SupportTicketId,
    TicketReplyId,
    TrackingEventId,
    UserId,
    WarehouseId,
)
from .money import percent_of, to_money
from .reference_number import ReferenceFormat

__all__ = [
    # IDs
    "CustomerId",
    "CustomsDeclarationId",
    "CustomsItemId",
    "DeliveryRouteId",
    "DriverId",
    "InvoiceId",
    "InvoiceItemId",
    "NotificationId",
    "PaymentId",
    "RouteStopId",
    "ShipmentId",
    "SupportTicketId",
    "TicketReplyId",
    "TrackingEventId",
    "UserId",
    "WarehouseId",
    # Geography
    "GeoPoint",
    # Money
    "percent_of",
    "to_money",
    # References
    "ReferenceFormat",
]
