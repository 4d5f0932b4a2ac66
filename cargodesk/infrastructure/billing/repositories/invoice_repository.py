"""Repository for Invoice aggregates."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session, selectinload

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.billing.entities.invoice import OPEN_STATUSES, Invoice, InvoiceStatus
from cargodesk.domain.billing.exceptions import InvoiceNotFoundError
from cargodesk.domain.common.value_objects.ids import CustomerId, InvoiceId
from cargodesk.domain.common.value_objects.reference_number import INVOICE_NUMBER
from cargodesk.infrastructure.billing.mappers.invoice_mapper import InvoiceMapper
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.models import Customer as CustomerORM
from cargodesk.models import Invoice as InvoiceORM

logger = logging.getLogger(__name__)


class InvoiceRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = InvoiceMapper()

    def _select(self) -> Select[tuple[InvoiceORM]]:
        return select(InvoiceORM).options(selectinload(InvoiceORM.items))

    def _get_orm(self, invoice_id: int) -> InvoiceORM | None:
        stmt = self._select().where(InvoiceORM.id == invoice_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        orm_model = self._get_orm(invoice_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: InvoiceStatus | None = None,
        customer_id: CustomerId | None = None,
        overdue_on: date | None = None,
    ) -> tuple[list[Invoice], int]:
        """
        Page through invoices, newest issue date first.

        Args:
            pagination: Offset/limit window
            search: Case-insensitive match on invoice number or customer name
            status: Only invoices in this status
            customer_id: Only this customer's invoices
            overdue_on: Only open invoices due before this day
        """
        stmt = self._select()
        if search:
            pattern = f"%{search.strip()}%"
            customer_match = (
                select(CustomerORM.id)
                .where(
                    or_(
                        CustomerORM.company_name.ilike(pattern),
                        CustomerORM.contact_person.ilike(pattern),
                    )
                )
                .scalar_subquery()
            )
            stmt = stmt.where(
                or_(
                    InvoiceORM.invoice_number.ilike(pattern),
                    InvoiceORM.customer_id.in_(customer_match),
                )
            )
        if status is not None:
            stmt = stmt.where(InvoiceORM.status == status)
        if customer_id is not None:
            stmt = stmt.where(InvoiceORM.customer_id == customer_id.value)
        if overdue_on is not None:
            stmt = stmt.where(
                InvoiceORM.status.in_([str(s) for s in OPEN_STATUSES]),
                InvoiceORM.due_date < overdue_on,
            )

        stmt = stmt.order_by(InvoiceORM.issue_date.desc(), InvoiceORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def find_past_due(self, today: date) -> list[Invoice]:
        stmt = self._select().where(
            InvoiceORM.status.in_([InvoiceStatus.SENT, InvoiceStatus.VIEWED]),
            InvoiceORM.due_date < today,
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def total_paid(self, customer_id: CustomerId) -> Decimal:
        stmt = select(func.coalesce(func.sum(InvoiceORM.paid_amount), 0)).where(
            InvoiceORM.customer_id == customer_id.value
        )
        return Decimal(self.db.execute(stmt).scalar_one())

    def next_invoice_number(self, on: date) -> str:
        return next_reference(self.db, InvoiceORM.invoice_number, INVOICE_NUMBER, on)

    def save(self, invoice: Invoice) -> Invoice:
        """
        Insert or update an invoice with its items.

        Raises:
            InvoiceNotFoundError: If an existing invoice is gone
        """
        if invoice.id.value == 0:
            orm_model = self.mapper.to_orm(invoice)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created invoice {orm_model.invoice_number} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(invoice.id.value)
        if not orm_model:
            raise InvoiceNotFoundError(invoice.id.value)
        self.mapper.to_orm(invoice, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)
