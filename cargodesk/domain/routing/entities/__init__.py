from .delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopPriority,
    StopStatus,
    StopType,
)
from .driver import Driver, DriverStatus

__all__ = [
    "DeliveryRoute",
    "Driver",
    "DriverStatus",
    "RouteStatus",
    "RouteStop",
    "StopPriority",
    "StopStatus",
    "StopType",
]
