"""Repository for Payment entities."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from cargodesk.domain.billing.entities.payment import Payment
from cargodesk.domain.common.value_objects.ids import InvoiceId
from cargodesk.domain.common.value_objects.reference_number import PAYMENT_NUMBER
from cargodesk.infrastructure.billing.mappers.payment_mapper import PaymentMapper
from cargodesk.infrastructure.common.queries import next_reference
from cargodesk.models import Payment as PaymentORM

logger = logging.getLogger(__name__)


class PaymentRepository:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = PaymentMapper()

    def list_for_invoice(self, invoice_id: InvoiceId) -> list[Payment]:
        stmt = (
            select(PaymentORM)
            .where(PaymentORM.invoice_id == invoice_id.value)
            .order_by(PaymentORM.payment_date, PaymentORM.id)
        )
        return [self.mapper.to_domain(row) for row in self.db.execute(stmt).scalars()]

    def next_payment_number(self, on: date) -> str:
        return next_reference(self.db, PaymentORM.payment_number, PAYMENT_NUMBER, on)

    def save(self, payment: Payment) -> Payment:
        orm_model = self.mapper.to_orm(payment)
        self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(
            f"Recorded payment {orm_model.payment_number} of {orm_model.amount} "
            f"for invoice {orm_model.invoice_id}"
        )
        return self.mapper.to_domain(orm_model)
