"""Mapper for DeliveryRoute ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import (
    DeliveryRouteId,
    DriverId,
    RouteStopId,
    ShipmentId,
    UserId,
    WarehouseId,
)
from cargodesk.domain.routing.entities.delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopPriority,
    StopStatus,
    StopType,
)
from cargodesk.models import DeliveryRoute as DeliveryRouteORM
from cargodesk.models import RouteStop as RouteStopORM
from cargodesk.utils import ensure_utc

# Stop columns copied as they are; enums and the location are handled separately
_STOP_FIELDS = (
    "stop_order",
    "customer_name",
    "address",
    "contact_phone",
    "planned_arrival_time",
    "planned_departure_time",
    "actual_arrival_time",
    "actual_departure_time",
    "estimated_duration",
    "distance_from_previous",
    "requires_signature",
    "is_fragile",
    "delivery_notes",
    "failure_reason",
)

_ROUTE_FIELDS = (
    "delivery_date",
    "planned_start_time",
    "planned_end_time",
    "actual_start_time",
    "actual_end_time",
    "total_distance",
    "estimated_duration",
    "total_stops",
    "completed_stops",
    "total_weight",
    "notes",
)


class DeliveryRouteMapper:
    def to_domain(self, orm_model: DeliveryRouteORM) -> DeliveryRoute:
        return DeliveryRoute(
            id=DeliveryRouteId(orm_model.id),
            route_number=orm_model.route_number,
            driver_id=DriverId(orm_model.driver_id),
            warehouse_id=WarehouseId(orm_model.warehouse_id),
            delivery_date=orm_model.delivery_date,
            status=RouteStatus(orm_model.status),
            planned_start_time=ensure_utc(orm_model.planned_start_time),
            planned_end_time=ensure_utc(orm_model.planned_end_time),
            actual_start_time=ensure_utc(orm_model.actual_start_time),
            actual_end_time=ensure_utc(orm_model.actual_end_time),
            total_distance=orm_model.total_distance,
            estimated_duration=orm_model.estimated_duration,
            total_stops=orm_model.total_stops,
            completed_stops=orm_model.completed_stops,
            total_weight=orm_model.total_weight,
            notes=orm_model.notes,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            stops=[self._stop_to_domain(stop) for stop in orm_model.stops],
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def _stop_to_domain(self, orm_stop: RouteStopORM) -> RouteStop:
        return RouteStop(
            id=RouteStopId(orm_stop.id),
            shipment_id=ShipmentId(orm_stop.shipment_id),
            type=StopType(orm_stop.type),
            customer_name=orm_stop.customer_name,
            address=orm_stop.address,
            stop_order=orm_stop.stop_order,
            status=StopStatus(orm_stop.status),
            location=GeoPoint.from_optional(orm_stop.latitude, orm_stop.longitude),
            contact_phone=orm_stop.contact_phone,
            planned_arrival_time=ensure_utc(orm_stop.planned_arrival_time),
            planned_departure_time=ensure_utc(orm_stop.planned_departure_time),
            actual_arrival_time=ensure_utc(orm_stop.actual_arrival_time),
            actual_departure_time=ensure_utc(orm_stop.actual_departure_time),
            estimated_duration=orm_stop.estimated_duration,
            distance_from_previous=orm_stop.distance_from_previous,
            priority=StopPriority(orm_stop.priority),
            requires_signature=orm_stop.requires_signature,
            is_fragile=orm_stop.is_fragile,
            delivery_notes=orm_stop.delivery_notes,
            failure_reason=orm_stop.failure_reason,
        )

    def to_orm(
        self, domain_entity: DeliveryRoute, orm_model: DeliveryRouteORM | None = None
    ) -> DeliveryRouteORM:
        if orm_model is None:
            orm_model = DeliveryRouteORM(
                route_number=domain_entity.route_number,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
        orm_model.driver_id = domain_entity.driver_id.value
        orm_model.warehouse_id = domain_entity.warehouse_id.value
        orm_model.status = domain_entity.status
        for name in _ROUTE_FIELDS:
            setattr(orm_model, name, getattr(domain_entity, name))
        self._sync_stops(domain_entity, orm_model)
        return orm_model

    def _sync_stops(self, domain_entity: DeliveryRoute, orm_model: DeliveryRouteORM) -> None:
        existing = {stop.id: stop for stop in orm_model.stops}
        synced: list[RouteStopORM] = []
        for stop in domain_entity.stops:
            orm_stop = existing.get(stop.id.value) or RouteStopORM(
                shipment_id=stop.shipment_id.value
            )
            for name in _STOP_FIELDS:
                setattr(orm_stop, name, getattr(stop, name))
            orm_stop.type = stop.type
            orm_stop.status = stop.status
            orm_stop.priority = stop.priority
            orm_stop.latitude = stop.location.latitude if stop.location else None
            orm_stop.longitude = stop.location.longitude if stop.location else None
            synced.append(orm_stop)
        orm_model.stops = synced
