"""Mapper for Payment ORM ↔ Domain conversion."""

from cargodesk.domain.billing.entities.payment import Payment, PaymentMethod
from cargodesk.domain.common.value_objects.ids import CustomerId, InvoiceId, PaymentId, UserId
from cargodesk.models import Payment as PaymentORM
from cargodesk.utils import ensure_utc


class PaymentMapper:
    def to_domain(self, orm_model: PaymentORM) -> Payment:
        return Payment(
            id=PaymentId(orm_model.id),
            payment_number=orm_model.payment_number,
            invoice_id=InvoiceId(orm_model.invoice_id),
            customer_id=CustomerId(orm_model.customer_id),
            status=orm_model.status,
            method=PaymentMethod(orm_model.method),
            currency=orm_model.currency,
            amount=orm_model.amount,
            reference_number=orm_model.reference_number,
            payment_date=ensure_utc(orm_model.payment_date),  # type: ignore[arg-type]
            notes=orm_model.notes,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            created_at=ensure_utc(orm_model.created_at),
        )

    def to_orm(self, domain_entity: Payment) -> PaymentORM:
        """Payments are never edited once recorded, so only new rows are built."""
        return PaymentORM(
            payment_number=domain_entity.payment_number,
            invoice_id=domain_entity.invoice_id.value,
            customer_id=domain_entity.customer_id.value,
            status=domain_entity.status,
            method=domain_entity.method,
            currency=domain_entity.currency,
            amount=domain_entity.amount,
            reference_number=domain_entity.reference_number,
            payment_date=domain_entity.payment_date,
            notes=domain_entity.notes,
            created_by=domain_entity.created_by.value if domain_entity.created_by else None,
        )
