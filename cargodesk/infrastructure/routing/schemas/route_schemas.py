from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cargodesk.domain.routing.entities.delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopPriority,
    StopStatus,
    StopType,
)


class RouteStopRequest(BaseModel):
    shipment_id: int
    type: StopType = StopType.DELIVERY
    priority: StopPriority = StopPriority.MEDIUM
    requires_signature: bool = True
    is_fragile: bool = False
    delivery_notes: str | None = None


class RouteCreateRequest(BaseModel):
    """Stops are visited in the order given until the route is optimised."""

    driver_id: int
    warehouse_id: int
    delivery_date: date
    planned_start_time: datetime | None = None
    planned_end_time: datetime | None = None
    notes: str | None = None
    stops: list[RouteStopRequest] = Field(..., min_length=1)


class StopCompleteRequest(BaseModel):
    notes: str | None = None
    signature: str | None = Field(None, max_length=255, description="Name of the signer")


class StopFailRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class RouteStopResponse(BaseModel):
    id: int
    shipment_id: int
    stop_order: int
    type: StopType
    status: StopStatus
    customer_name: str
    address: str
    latitude: float | None
    longitude: float | None
    contact_phone: str | None
    planned_arrival_time: datetime | None
    planned_departure_time: datetime | None
    actual_arrival_time: datetime | None
    actual_departure_time: datetime | None
    estimated_duration: int
    distance_from_previous: Decimal
    priority: StopPriority
    requires_signature: bool
    is_fragile: bool
    delivery_notes: str | None
    failure_reason: str | None

    @classmethod
    def from_domain(cls, stop: RouteStop) -> "RouteStopResponse":
        return cls(
            id=stop.id.value,
            shipment_id=stop.shipment_id.value,
            stop_order=stop.stop_order,
            type=stop.type,
            status=stop.status,
            customer_name=stop.customer_name,
            address=stop.address,
            latitude=stop.location.latitude if stop.location else None,
            longitude=stop.location.longitude if stop.location else None,
            contact_phone=stop.contact_phone,
            planned_arrival_time=stop.planned_arrival_time,
            planned_departure_time=stop.planned_departure_time,
            actual_arrival_time=stop.actual_arrival_time,
            actual_departure_time=stop.actual_departure_time,
            estimated_duration=stop.estimated_duration,
            distance_from_previous=stop.distance_from_previous,
            priority=stop.priority,
            requires_signature=stop.requires_signature,
            is_fragile=stop.is_fragile,
            delivery_notes=stop.delivery_notes,
            failure_reason=stop.failure_reason,
        )


class RouteResponse(BaseModel):
    id: int
    route_number: str
    driver_id: int
    warehouse_id: int
    delivery_date: date
    status: RouteStatus
    planned_start_time: datetime | None
    planned_end_time: datetime | None
    actual_start_time: datetime | None
    actual_end_time: datetime | None
    total_distance: Decimal = Field(..., description="Kilometres")
    estimated_duration: Decimal = Field(..., description="Hours")
    total_stops: int
    completed_stops: int
    progress_percentage: float
    total_weight: Decimal
    notes: str | None
    current_stop_id: int | None
    stops: list[RouteStopResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, route: DeliveryRoute) -> "RouteResponse":
        current = route.current_stop()
        return cls(
            id=route.id.value,
            route_number=route.route_number,
            driver_id=route.driver_id.value,
            warehouse_id=route.warehouse_id.value,
            delivery_date=route.delivery_date,
            status=route.status,
            planned_start_time=route.planned_start_time,
            planned_end_time=route.planned_end_time,
            actual_start_time=route.actual_start_time,
            actual_end_time=route.actual_end_time,
            total_distance=route.total_distance,
            estimated_duration=route.estimated_duration,
            total_stops=route.total_stops,
            completed_stops=route.completed_stops,
            progress_percentage=route.progress_percentage,
            total_weight=route.total_weight,
            notes=route.notes,
            current_stop_id=current.id.value if current else None,
            stops=[
                RouteStopResponse.from_domain(stop)
                for stop in sorted(route.stops, key=lambda stop: stop.stop_order)
            ],
            created_at=route.created_at,
            updated_at=route.updated_at,
        )
