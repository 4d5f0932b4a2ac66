"""Repository for customs declarations."""

import logging
from datetime import date

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session, selectinload

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomsDeclarationId, ShipmentId
from cargodesk.domain.common.value_objects.reference_number import DECLARATION_NUMBER
from cargodesk.domain.customs.entities.customs_declaration import (
    CustomsDeclaration,
    DeclarationStatus,
    DeclarationType,
)
from cargodesk.domain.customs.exceptions import CustomsDeclarationNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.customs.mappers.customs_declaration_mapper import (
    CustomsDeclarationMapper,
)
from cargodesk.models import CustomsDeclaration as CustomsDeclarationORM
from cargodesk.models import Shipment as ShipmentORM

logger = logging.getLogger(__name__)


class CustomsDeclarationRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CustomsDeclarationMapper()

    def _select(self) -> Select[tuple[CustomsDeclarationORM]]:
        return select(CustomsDeclarationORM).options(selectinload(CustomsDeclarationORM.items))

    def _get_orm(self, declaration_id: int) -> CustomsDeclarationORM | None:
        stmt = self._select().where(CustomsDeclarationORM.id == declaration_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, declaration_id: CustomsDeclarationId) -> CustomsDeclaration | None:
        orm_model = self._get_orm(declaration_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DeclarationStatus | None = None,
        declaration_type: DeclarationType | None = None,
        shipment_id: ShipmentId | None = None,
    ) -> tuple[list[CustomsDeclaration], int]:
        """Search by declaration number, goods description or shipment tracking number."""
        stmt = self._select()
        if search:
            pattern = f"%{search.strip()}%"
            tracked = (
                select(ShipmentORM.id)
                .where(ShipmentORM.tracking_number.ilike(pattern))
                .scalar_subquery()
            )
            stmt = stmt.where(
                or_(
                    CustomsDeclarationORM.declaration_number.ilike(pattern),
                    CustomsDeclarationORM.description_of_goods.ilike(pattern),
                    CustomsDeclarationORM.shipment_id.in_(tracked),
                )
            )
        if status is not None:
            stmt = stmt.where(CustomsDeclarationORM.status == status)
        if declaration_type is not None:
            stmt = stmt.where(CustomsDeclarationORM.declaration_type == declaration_type)
        if shipment_id is not None:
            stmt = stmt.where(CustomsDeclarationORM.shipment_id == shipment_id.value)

        stmt = stmt.order_by(
            CustomsDeclarationORM.created_at.desc(), CustomsDeclarationORM.id.desc()
        )
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def next_declaration_number(self, on: date) -> str:
        return next_reference(
            self.db, CustomsDeclarationORM.declaration_number, DECLARATION_NUMBER, on
        )

    def save(self, declaration: CustomsDeclaration) -> CustomsDeclaration:
        if declaration.id.value == 0:
            orm_model = self.mapper.to_orm(declaration)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(
                f"Created customs declaration {orm_model.declaration_number} "
                f"for shipment {orm_model.shipment_id}"
            )
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(declaration.id.value)
        if not orm_model:
            raise CustomsDeclarationNotFoundError(declaration.id.value)
        self.mapper.to_orm(declaration, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, declaration: CustomsDeclaration) -> None:
        """Drafts are removed outright together with their items."""
        orm_model = self._get_orm(declaration.id.value)
        if not orm_model:
            raise CustomsDeclarationNotFoundError(declaration.id.value)
        self.db.delete(orm_model)
        self.db.commit()
        logger.info(f"Deleted customs declaration {declaration.declaration_number}")
