from .shipment import (
    PackageType,
    ServiceType,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    ShipmentStatusChanged,
    TrackingEvent,
)

__all__ = [
    "PackageType",
    "ServiceType",
    "Shipment",
    "ShipmentItem",
    "ShipmentStatus",
    "ShipmentStatusChanged",
    "TrackingEvent",
]
