"""Repository for support tickets."""

import logging
from datetime import date, datetime, timedelta

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.orm import Session, selectinload

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId, SupportTicketId, UserId
from cargodesk.domain.common.value_objects.reference_number import TICKET_NUMBER
from cargodesk.domain.support.entities.support_ticket import (
    OPEN_STATUSES,
    SLA_HOURS,
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketStatus,
)
from cargodesk.domain.support.exceptions import SupportTicketNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.support.mappers.support_ticket_mapper import SupportTicketMapper
from cargodesk.models import SupportTicket as SupportTicketORM

logger = logging.getLogger(__name__)


class SupportTicketRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = SupportTicketMapper()

    def _select(self) -> Select[tuple[SupportTicketORM]]:
        return select(SupportTicketORM).options(selectinload(SupportTicketORM.replies))

    def _get_orm(self, ticket_id: int) -> SupportTicketORM | None:
        stmt = self._select().where(SupportTicketORM.id == ticket_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, ticket_id: SupportTicketId) -> SupportTicket | None:
        orm_model = self._get_orm(ticket_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: TicketStatus | None = None,
        priority: TicketPriority | None = None,
        category: TicketCategory | None = None,
        assigned_to: UserId | None = None,
        customer_id: CustomerId | None = None,
        overdue_at: datetime | None = None,
    ) -> tuple[list[SupportTicket], int]:
        stmt = self._select()
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    SupportTicketORM.ticket_number.ilike(pattern),
                    SupportTicketORM.subject.ilike(pattern),
                    SupportTicketORM.description.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(SupportTicketORM.status == status)
        if priority is not None:
            stmt = stmt.where(SupportTicketORM.priority == priority)
        if category is not None:
            stmt = stmt.where(SupportTicketORM.category == category)
        if assigned_to is not None:
            stmt = stmt.where(SupportTicketORM.assigned_to == assigned_to.value)
        if customer_id is not None:
            stmt = stmt.where(SupportTicketORM.customer_id == customer_id.value)
        if overdue_at is not None:
            # One deadline per priority, so the SLA test stays in SQL
            past_sla = [
                and_(
                    SupportTicketORM.priority == level,
                    SupportTicketORM.created_at < overdue_at - timedelta(hours=hours),
                )
                for level, hours in SLA_HOURS.items()
            ]
            stmt = stmt.where(
                SupportTicketORM.status.in_([str(s) for s in OPEN_STATUSES]),
                or_(*past_sla),
            )

        stmt = stmt.order_by(SupportTicketORM.created_at.desc(), SupportTicketORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def next_ticket_number(self, on: date) -> str:
        return next_reference(self.db, SupportTicketORM.ticket_number, TICKET_NUMBER, on)

    def save(self, ticket: SupportTicket) -> SupportTicket:
        if ticket.id.value == 0:
            orm_model = self.mapper.to_orm(ticket)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created support ticket {orm_model.ticket_number} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(ticket.id.value)
        if not orm_model:
            raise SupportTicketNotFoundError(ticket.id.value)
        self.mapper.to_orm(ticket, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
