"""Delivery route aggregate and its stops."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum

from cargodesk.domain.common.aggregate_root import AggregateRoot
from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import (
    DeliveryRouteId,
    DriverId,
    RouteStopId,
    ShipmentId,
    UserId,
    WarehouseId,
)

DEFAULT_STOP_MINUTES = 15


class RouteStatus(StrEnum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class StopType(StrEnum):
    PICKUP = "pickup"
    DELIVERY = "delivery"


class StopStatus(StrEnum):
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    ARRIVED = "arrived"
    COMPLETED = "completed"
    FAILED = "failed"


class StopPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


OPEN_STOP_STATUSES = frozenset({StopStatus.PENDING, StopStatus.IN_TRANSIT, StopStatus.ARRIVED})


@dataclass
class RouteStop(Entity[RouteStopId]):
    """One pickup or delivery on a route."""

    id: RouteStopId
    shipment_id: ShipmentId
    type: StopType
    customer_name: str
    address: str
    stop_order: int = 0
    status: StopStatus = StopStatus.PENDING
    location: GeoPoint | None = None
    contact_phone: str | None = None
    planned_arrival_time: datetime | None = None
    planned_departure_time: datetime | None = None
    actual_arrival_time: datetime | None = None
    actual_departure_time: datetime | None = None
    estimated_duration: int = DEFAULT_STOP_MINUTES
    distance_from_previous: Decimal = Decimal("0")
    priority: StopPriority = StopPriority.MEDIUM
    requires_signature: bool = True
    is_fragile: bool = False
    delivery_notes: str | None = None
    failure_reason: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STOP_STATUSES

    @property
    def is_delivery(self) -> bool:
        return self.type == StopType.DELIVERY

    def arrive(self, at: datetime | None = None) -> None:
        if self.status not in (StopStatus.PENDING, StopStatus.IN_TRANSIT):
            raise InvalidStatusTransitionError("route stop", self.status, StopStatus.ARRIVED)
        self.status = StopStatus.ARRIVED
        self.actual_arrival_time = at or datetime.now(UTC)

    def complete(self, notes: str | None = None, at: datetime | None = None) -> None:
        if not self.is_open:
            raise InvalidStatusTransitionError("route stop", self.status, StopStatus.COMPLETED)
        when = at or datetime.now(UTC)
        if self.actual_arrival_time is None:
            self.actual_arrival_time = when
        self.status = StopStatus.COMPLETED
        self.actual_departure_time = when
        if notes:
            self.delivery_notes = notes

    def fail(self, reason: str, at: datetime | None = None) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A failure reason is required", field="reason")
        if not self.is_open:
            raise InvalidStatusTransitionError("route stop", self.status, StopStatus.FAILED)
        self.status = StopStatus.FAILED
        self.failure_reason = reason.strip()
        self.actual_departure_time = at or datetime.now(UTC)

    @classmethod
    def create(
        cls,
        shipment_id: ShipmentId,
        stop_type: StopType,
        customer_name: str,
        address: str,
        location: GeoPoint | None = None,
        contact_phone: str | None = None,
        priority: StopPriority = StopPriority.MEDIUM,
        requires_signature: bool = True,
        is_fragile: bool = False,
        delivery_notes: str | None = None,
    ) -> "RouteStop":
        return cls(
            id=RouteStopId.generate(),
            shipment_id=shipment_id,
            type=stop_type,
            customer_name=customer_name,
            address=address,
            location=location,
            contact_phone=contact_phone,
            priority=priority,
            requires_signature=requires_signature,
            is_fragile=is_fragile,
            delivery_notes=delivery_notes,
        )


@dataclass
class DeliveryRoute(AggregateRoot[DeliveryRouteId]):
    """
    A driver's run of pickups and deliveries for one day.

    Status flow: planned -> in_progress -> completed, or planned -> cancelled.
    Stops are normally worked in stop_order. While the route is in progress
    exactly one stop is underway (in transit or arrived) until none is open.
    """

    id: DeliveryRouteId
    route_number: str
    driver_id: DriverId
    warehouse_id: WarehouseId
    delivery_date: date
    status: RouteStatus = RouteStatus.PLANNED
    planned_start_time: datetime | None = None
    planned_end_time: datetime | None = None
    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None
    total_distance: Decimal = Decimal("0")
    estimated_duration: Decimal = Decimal("0")
    total_stops: int = 0
    completed_stops: int = 0
    total_weight: Decimal = Decimal("0")
    notes: str | None = None
    created_by: UserId | None = None
    stops: list[RouteStop] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def progress_percentage(self) -> float:
        if self.total_stops == 0:
            return 0.0
        return round(self.completed_stops / self.total_stops * 100, 1)

    @property
    def is_deletable(self) -> bool:
        return self.status not in (RouteStatus.IN_PROGRESS, RouteStatus.COMPLETED)

    def current_stop(self) -> RouteStop | None:
        open_stops = [stop for stop in self.stops if stop.is_open]
        return min(open_stops, key=lambda stop: stop.stop_order, default=None)

    def get_stop(self, stop_id: int) -> RouteStop:
        for stop in self.stops:
            if stop.id.value == stop_id:
                return stop
        raise BusinessRuleViolationError(
            "stop_on_route", f"Stop {stop_id} is not on route {self.route_number}"
        )

    def start(self, at: datetime | None = None) -> None:
        if self.status != RouteStatus.PLANNED:
            raise InvalidStatusTransitionError("route", self.status, RouteStatus.IN_PROGRESS)
        if not self.stops:
            raise BusinessRuleViolationError(
                "route_has_stops", "Cannot start a route without stops"
            )
        self.status = RouteStatus.IN_PROGRESS
        self.actual_start_time = at or datetime.now(UTC)
        first = self.current_stop()
        if first is not None and first.status == StopStatus.PENDING:
            first.status = StopStatus.IN_TRANSIT

    def arrive_at_stop(self, stop_id: int, at: datetime | None = None) -> RouteStop:
        self._require_in_progress()
        stop = self.get_stop(stop_id)
        stop.arrive(at)
        # one stop is worked at a time
        for other in self.stops:
            if other is not stop and other.status == StopStatus.IN_TRANSIT:
                other.status = StopStatus.PENDING
        return stop

    def complete_stop(
        self, stop_id: int, notes: str | None = None, at: datetime | None = None
    ) -> RouteStop:
        """Complete a stop and move the route on to the next one."""
        self._require_in_progress()
        stop = self.get_stop(stop_id)
        stop.complete(notes, at)
        self._advance(at)
        return stop

    def fail_stop(self, stop_id: int, reason: str, at: datetime | None = None) -> RouteStop:
        self._require_in_progress()
        stop = self.get_stop(stop_id)
        stop.fail(reason, at)
        self._advance(at)
        return stop

    @property
    def completed_deliveries(self) -> int:
        return sum(
            1 for stop in self.stops if stop.is_delivery and stop.status == StopStatus.COMPLETED
        )

    def cancel(self) -> None:
        if self.status != RouteStatus.PLANNED:
            raise InvalidStatusTransitionError("route", self.status, RouteStatus.CANCELLED)
        self.status = RouteStatus.CANCELLED

    def _advance(self, at: datetime | None) -> None:
        self.completed_stops = sum(1 for stop in self.stops if stop.status == StopStatus.COMPLETED)
        underway = any(
            stop.status in (StopStatus.IN_TRANSIT, StopStatus.ARRIVED) for stop in self.stops
        )
        following = self.current_stop()
        if not underway and following is not None:
            following.status = StopStatus.IN_TRANSIT
        if not any(stop.is_open for stop in self.stops):
            self.status = RouteStatus.COMPLETED
            self.actual_end_time = at or datetime.now(UTC)

    def _require_in_progress(self) -> None:
        if self.status != RouteStatus.IN_PROGRESS:
            raise BusinessRuleViolationError(
                "route_in_progress", f"Route {self.route_number} is not in progress"
            )

    @classmethod
    def create(
        cls,
        route_number: str,
        driver_id: DriverId,
        warehouse_id: WarehouseId,
        delivery_date: date,
        planned_start_time: datetime | None = None,
        planned_end_time: datetime | None = None,
        notes: str | None = None,
        created_by: UserId | None = None,
    ) -> "DeliveryRoute":
        if planned_start_time and planned_end_time and planned_end_time <= planned_start_time:
            raise ValidationError(
                "Planned end time must be after the start time", field="planned_end_time"
            )
        return cls(
            id=DeliveryRouteId.generate(),
            route_number=route_number,
            driver_id=driver_id,
            warehouse_id=warehouse_id,
            delivery_date=delivery_date,
            planned_start_time=planned_start_time,
            planned_end_time=planned_end_time,
            notes=notes,
            created_by=created_by,
        )
