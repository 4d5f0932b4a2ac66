"""Repository for Warehouse domain entities."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import WarehouseId
from cargodesk.domain.warehouses.entities.warehouse import Warehouse, WarehouseStatus
from cargodesk.domain.warehouses.exceptions import WarehouseNotFoundError
from cargodesk.infrastructure.common.queries import paginate
from cargodesk.infrastructure.warehouses.mappers.warehouse_mapper import WarehouseMapper
from cargodesk.models import Warehouse as WarehouseORM
from cargodesk.utils import utc_now

logger = logging.getLogger(__name__)


class WarehouseRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = WarehouseMapper()

    def _get_orm(self, warehouse_id: int) -> WarehouseORM | None:
        stmt = select(WarehouseORM).where(
            WarehouseORM.id == warehouse_id, WarehouseORM.deleted_at.is_(None)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, warehouse_id: WarehouseId) -> Warehouse | None:
        orm_model = self._get_orm(warehouse_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_code(self, code: str) -> Warehouse | None:
        """Codes of deleted warehouses stay reserved."""
        stmt = select(WarehouseORM).where(WarehouseORM.code == code)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: WarehouseStatus | None = None,
    ) -> tuple[list[Warehouse], int]:
        stmt = select(WarehouseORM).where(WarehouseORM.deleted_at.is_(None))
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    WarehouseORM.code.ilike(pattern),
                    WarehouseORM.name.ilike(pattern),
                    WarehouseORM.city.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(WarehouseORM.status == status)

        rows, total = paginate(self.db, stmt.order_by(WarehouseORM.name), pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def save(self, warehouse: Warehouse) -> Warehouse:
        if warehouse.id.value == 0:
            orm_model = self.mapper.to_orm(warehouse)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created warehouse {orm_model.code} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(warehouse.id.value)
        if not orm_model:
            raise WarehouseNotFoundError(warehouse.id.value)
        self.mapper.to_orm(warehouse, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, warehouse: Warehouse) -> None:
        """Soft delete."""
        orm_model = self._get_orm(warehouse.id.value)
        if not orm_model:
            raise WarehouseNotFoundError(warehouse.id.value)
        orm_model.deleted_at = utc_now()
        self.db.commit()
        logger.info(f"Soft deleted warehouse {warehouse.code}")
