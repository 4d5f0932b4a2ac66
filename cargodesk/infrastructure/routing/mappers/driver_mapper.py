"""Mapper for Driver ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import DriverId
from cargodesk.domain.routing.entities.driver import Driver, DriverStatus
from cargodesk.models import Driver as DriverORM
from cargodesk.utils import ensure_utc

_PROFILE_FIELDS = (
    "name",
    "email",
    "phone",
    "license_number",
    "license_expiry",
    "rating",
    "total_deliveries",
    "vehicle_type",
    "vehicle_plate",
    "vehicle_capacity",
    "is_available",
    "last_location_update",
)


class DriverMapper:
    def to_domain(self, orm_model: DriverORM) -> Driver:
        return Driver(
            id=DriverId(orm_model.id),
            driver_code=orm_model.driver_code,
            name=orm_model.name,
            email=orm_model.email,
            phone=orm_model.phone,
            license_number=orm_model.license_number,
            license_expiry=orm_model.license_expiry,
            status=DriverStatus(orm_model.status),
            rating=orm_model.rating,
            total_deliveries=orm_model.total_deliveries,
            vehicle_type=orm_model.vehicle_type,
            vehicle_plate=orm_model.vehicle_plate,
            vehicle_capacity=orm_model.vehicle_capacity,
            is_available=orm_model.is_available,
            location=GeoPoint.from_optional(
                orm_model.current_latitude, orm_model.current_longitude
            ),
            last_location_update=ensure_utc(orm_model.last_location_update),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Driver, orm_model: DriverORM | None = None) -> DriverORM:
        if orm_model is None:
            orm_model = DriverORM(driver_code=domain_entity.driver_code)
        for name in _PROFILE_FIELDS:
            setattr(orm_model, name, getattr(domain_entity, name))
        orm_model.status = domain_entity.status
        location = domain_entity.location
        orm_model.current_latitude = location.latitude if location else None
        orm_model.current_longitude = location.longitude if location else None
        return orm_model
