"""Repository for Shipment aggregates."""

import logging
from datetime import date, datetime

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session, selectinload

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId, ShipmentId
from cargodesk.domain.common.value_objects.reference_number import TRACKING_NUMBER
from cargodesk.domain.shipping.entities.shipment import ServiceType, Shipment, ShipmentStatus
from cargodesk.domain.shipping.exceptions import ShipmentNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.shipping.mappers.shipment_mapper import ShipmentMapper
from cargodesk.models import Shipment as ShipmentORM
from cargodesk.utils import utc_now

logger = logging.getLogger(__name__)


class ShipmentRepository:
    """Shipment persistence. Soft-deleted shipments are invisible to every query."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = ShipmentMapper()

    def _select(self) -> Select[tuple[ShipmentORM]]:
        return (
            select(ShipmentORM)
            .options(selectinload(ShipmentORM.items), selectinload(ShipmentORM.tracking_events))
            .where(ShipmentORM.deleted_at.is_(None))
        )

    def _get_orm(self, shipment_id: int) -> ShipmentORM | None:
        stmt = self._select().where(ShipmentORM.id == shipment_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, shipment_id: ShipmentId) -> Shipment | None:
        orm_model = self._get_orm(shipment_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        stmt = self._select().where(ShipmentORM.tracking_number == tracking_number)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: ShipmentStatus | None = None,
        service_type: ServiceType | None = None,
        customer_id: CustomerId | None = None,
    ) -> tuple[list[Shipment], int]:
        """
        Page through shipments, newest first.

        Args:
            pagination: Offset/limit window
            search: Case-insensitive match on tracking number, sender or recipient name
            status: Only shipments in this status
            service_type: Only shipments of this service
            customer_id: Only this customer's shipments
        """
        stmt = self._select()
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    ShipmentORM.tracking_number.ilike(pattern),
                    ShipmentORM.sender_name.ilike(pattern),
                    ShipmentORM.recipient_name.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(ShipmentORM.status == status)
        if service_type is not None:
            stmt = stmt.where(ShipmentORM.service_type == service_type)
        if customer_id is not None:
            stmt = stmt.where(ShipmentORM.customer_id == customer_id.value)

        stmt = stmt.order_by(ShipmentORM.created_at.desc(), ShipmentORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def count_created_since(self, customer_id: CustomerId, since: datetime) -> int:
        stmt = select(func.count(ShipmentORM.id)).where(
            ShipmentORM.customer_id == customer_id.value,
            ShipmentORM.created_at >= since,
            ShipmentORM.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one()

    def next_tracking_number(self, on: date) -> str:
        return next_reference(self.db, ShipmentORM.tracking_number, TRACKING_NUMBER, on)

    def save(self, shipment: Shipment) -> Shipment:
        """
        Insert or update a shipment with its items and new tracking events.

        Raises:
            ShipmentNotFoundError: If an existing shipment is gone
        """
        if shipment.id.value == 0:
            orm_model = self.mapper.to_orm(shipment)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created shipment {orm_model.tracking_number} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(shipment.id.value)
        if not orm_model:
            raise ShipmentNotFoundError(shipment.id.value)
        self.mapper.to_orm(shipment, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, shipment: Shipment) -> None:
        """Soft delete."""
        orm_model = self._get_orm(shipment.id.value)
        if not orm_model:
            raise ShipmentNotFoundError(shipment.id.value)
        orm_model.deleted_at = utc_now()
        self.db.commit()
        logger.info(f"Soft deleted shipment {shipment.tracking_number}")
