"""Repository for drivers."""

import logging
from datetime import date

from sqlalchemy import exists, or_, select
from sqlalchemy.orm import Session

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import DriverId
from cargodesk.domain.common.value_objects.reference_number import DRIVER_CODE
from cargodesk.domain.routing.entities.driver import Driver, DriverStatus
from cargodesk.domain.routing.exceptions import DriverNotFoundError
from cargodesk.exceptions import ConflictError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.routing.mappers.driver_mapper import DriverMapper
from cargodesk.models import DeliveryRoute as DeliveryRouteORM
from cargodesk.models import Driver as DriverORM

logger = logging.getLogger(__name__)


class DriverRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DriverMapper()

    def find_by_id(self, driver_id: DriverId) -> Driver | None:
        orm_model = self.db.get(DriverORM, driver_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> Driver | None:
        stmt = select(DriverORM).where(DriverORM.email == email)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_license_number(self, license_number: str) -> Driver | None:
        stmt = select(DriverORM).where(DriverORM.license_number == license_number)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DriverStatus | None = None,
        available: bool | None = None,
    ) -> tuple[list[Driver], int]:
        stmt = select(DriverORM)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    DriverORM.driver_code.ilike(pattern),
                    DriverORM.name.ilike(pattern),
                    DriverORM.email.ilike(pattern),
                    DriverORM.vehicle_plate.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(DriverORM.status == status)
        if available is not None:
            stmt = stmt.where(DriverORM.is_available.is_(available))

        stmt = stmt.order_by(DriverORM.name, DriverORM.id)
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def next_driver_code(self, on: date) -> str:
        return next_reference(self.db, DriverORM.driver_code, DRIVER_CODE, on)

    def save(self, driver: Driver) -> Driver:
        if driver.id.value == 0:
            orm_model = self.mapper.to_orm(driver)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created driver {orm_model.driver_code} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self.db.get(DriverORM, driver.id.value)
        if not orm_model:
            raise DriverNotFoundError(driver.id.value)
        self.mapper.to_orm(driver, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, driver: Driver) -> None:
        """
        Raises:
            ConflictError: If routes still reference the driver
        """
        orm_model = self.db.get(DriverORM, driver.id.value)
        if not orm_model:
            raise DriverNotFoundError(driver.id.value)
        has_routes = self.db.execute(
            select(exists().where(DeliveryRouteORM.driver_id == orm_model.id))
        ).scalar()
        if has_routes:
            raise ConflictError(
                f"Driver {orm_model.driver_code} has delivery routes; deactivate instead"
            )
        self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted driver {driver.driver_code}")
