"""Repository for delivery routes."""

import logging
from datetime import date

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import DeliveryRouteId, DriverId, WarehouseId
from cargodesk.domain.common.value_objects.reference_number import ROUTE_NUMBER
from cargodesk.domain.routing.entities.delivery_route import DeliveryRoute, RouteStatus
from cargodesk.domain.routing.exceptions import DeliveryRouteNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.routing.mappers.delivery_route_mapper import DeliveryRouteMapper
from cargodesk.models import DeliveryRoute as DeliveryRouteORM

logger = logging.getLogger(__name__)


class DeliveryRouteRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DeliveryRouteMapper()

    def _select(self) -> Select[tuple[DeliveryRouteORM]]:
        return select(DeliveryRouteORM).options(selectinload(DeliveryRouteORM.stops))

    def _get_orm(self, route_id: int) -> DeliveryRouteORM | None:
        stmt = self._select().where(DeliveryRouteORM.id == route_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, route_id: DeliveryRouteId) -> DeliveryRoute | None:
        orm_model = self._get_orm(route_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        delivery_date: date | None = None,
        driver_id: DriverId | None = None,
        warehouse_id: WarehouseId | None = None,
        status: RouteStatus | None = None,
    ) -> tuple[list[DeliveryRoute], int]:
        stmt = self._select()
        if delivery_date is not None:
            stmt = stmt.where(DeliveryRouteORM.delivery_date == delivery_date)
        if driver_id is not None:
            stmt = stmt.where(DeliveryRouteORM.driver_id == driver_id.value)
        if warehouse_id is not None:
            stmt = stmt.where(DeliveryRouteORM.warehouse_id == warehouse_id.value)
        if status is not None:
            stmt = stmt.where(DeliveryRouteORM.status == status)

        stmt = stmt.order_by(DeliveryRouteORM.delivery_date.desc(), DeliveryRouteORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def next_route_number(self, on: date) -> str:
        return next_reference(self.db, DeliveryRouteORM.route_number, ROUTE_NUMBER, on)

    def save(self, route: DeliveryRoute) -> DeliveryRoute:
        if route.id.value == 0:
            orm_model = self.mapper.to_orm(route)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(
                f"Created route {orm_model.route_number} with {orm_model.total_stops} stops"
            )
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(route.id.value)
        if not orm_model:
            raise DeliveryRouteNotFoundError(route.id.value)
        self.mapper.to_orm(route, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, route: DeliveryRoute) -> None:
        orm_model = self._get_orm(route.id.value)
        if not orm_model:
            raise DeliveryRouteNotFoundError(route.id.value)
        self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted route {route.route_number}")
