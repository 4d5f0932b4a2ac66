from cargodesk.infrastructure.routing.schemas.driver_schemas import (
    DriverAvailabilityRequest,
    DriverCreateRequest,
    DriverLocationRequest,
    DriverResponse,
    DriverUpdateRequest,
)
from cargodesk.infrastructure.routing.schemas.route_schemas import (
    RouteCreateRequest,
    RouteResponse,
    RouteStopRequest,
    RouteStopResponse,
    StopCompleteRequest,
    StopFailRequest,
)

__all__ = [
    "DriverAvailabilityRequest",
    "DriverCreateRequest",
    "DriverLocationRequest",
    "DriverResponse",
    "DriverUpdateRequest",
    "RouteCreateRequest",
    "RouteResponse",
    "RouteStopRequest",
    "RouteStopResponse",
    "StopCompleteRequest",
    "StopFailRequest",
]
