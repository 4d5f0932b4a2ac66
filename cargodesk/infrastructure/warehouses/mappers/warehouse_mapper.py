"""Mapper for Warehouse ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import WarehouseId
from cargodesk.domain.warehouses.entities.warehouse import Warehouse, WarehouseStatus
from cargodesk.models import Warehouse as WarehouseORM
from cargodesk.utils import ensure_utc


class WarehouseMapper:
    def to_domain(self, orm_model: WarehouseORM) -> Warehouse:
        return Warehouse(
            id=WarehouseId(orm_model.id),
            code=orm_model.code,
            name=orm_model.name,
            address=orm_model.address,
            city=orm_model.city,
            state_province=orm_model.state_province,
            postal_code=orm_model.postal_code,
            country=orm_model.country,
            location=GeoPoint.from_optional(orm_model.latitude, orm_model.longitude),
            capacity_cubic_meters=orm_model.capacity_cubic_meters,
            operating_hours=dict(orm_model.operating_hours or {}),
            contact_person=orm_model.contact_person,
            phone=orm_model.phone,
            email=orm_model.email,
            status=WarehouseStatus(orm_model.status),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(
        self, domain_entity: Warehouse, orm_model: WarehouseORM | None = None
    ) -> WarehouseORM:
        if orm_model is None:
            orm_model = WarehouseORM()
        orm_model.code = domain_entity.code
        orm_model.name = domain_entity.name
        orm_model.address = domain_entity.address
        orm_model.city = domain_entity.city
        orm_model.state_province = domain_entity.state_province
        orm_model.postal_code = domain_entity.postal_code
        orm_model.country = domain_entity.country
        location = domain_entity.location
        orm_model.latitude = location.latitude if location else None
        orm_model.longitude = location.longitude if location else None
        orm_model.capacity_cubic_meters = domain_entity.capacity_cubic_meters
        orm_model.operating_hours = dict(domain_entity.operating_hours) or None
        orm_model.contact_person = domain_entity.contact_person
        orm_model.phone = domain_entity.phone
        orm_model.email = domain_entity.email
        orm_model.status = domain_entity.status
        return orm_model
