"""Mapper for Invoice ORM ↔ Domain conversion."""

from cargodesk.domain.billing.entities.invoice import (
    Invoice,
    InvoiceItem,
    InvoiceItemType,
    InvoiceStatus,
    InvoiceType,
)
from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    InvoiceId,
    InvoiceItemId,
    ShipmentId,
    UserId,
)
from cargodesk.models import Invoice as InvoiceORM
from cargodesk.models import InvoiceItem as InvoiceItemORM
from cargodesk.utils import ensure_utc


def _user_id(value: int | None) -> UserId | None:
    return UserId(value) if value else None


def _raw_id(value: UserId | ShipmentId | None) -> int | None:
    return value.value if value else None


class InvoiceMapper:
    """
    Mapper for Invoice ORM ↔ Domain conversion.

    Stored totals are taken as they are; the aggregate only recomputes them
    when its items or payments change.
    """

    def to_domain(self, orm_model: InvoiceORM) -> Invoice:
        return Invoice(
            id=InvoiceId(orm_model.id),
            invoice_number=orm_model.invoice_number,
            customer_id=CustomerId(orm_model.customer_id),
            shipment_id=ShipmentId(orm_model.shipment_id) if orm_model.shipment_id else None,
            status=InvoiceStatus(orm_model.status),
            type=InvoiceType(orm_model.type),
            issue_date=orm_model.issue_date,
            due_date=orm_model.due_date,
            paid_date=orm_model.paid_date,
            currency=orm_model.currency,
            exchange_rate=orm_model.exchange_rate,
            subtotal=orm_model.subtotal,
            tax_amount=orm_model.tax_amount,
            discount_amount=orm_model.discount_amount,
            total_amount=orm_model.total_amount,
            paid_amount=orm_model.paid_amount,
            balance_due=orm_model.balance_due,
            tax_rate=orm_model.tax_rate,
            tax_type=orm_model.tax_type,
            billing_address=dict(orm_model.billing_address or {}),
            company_address=dict(orm_model.company_address or {}),
            notes=orm_model.notes,
            terms_conditions=orm_model.terms_conditions,
            payment_terms=orm_model.payment_terms,
            created_by=_user_id(orm_model.created_by),
            sent_by=_user_id(orm_model.sent_by),
            sent_at=ensure_utc(orm_model.sent_at),
            viewed_at=ensure_utc(orm_model.viewed_at),
            view_count=orm_model.view_count,
            cancelled_at=ensure_utc(orm_model.cancelled_at),
            cancelled_by=_user_id(orm_model.cancelled_by),
            cancellation_reason=orm_model.cancellation_reason,
            items=[self._item_to_domain(item) for item in orm_model.items],
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def _item_to_domain(self, orm_item: InvoiceItemORM) -> InvoiceItem:
        return InvoiceItem(
            id=InvoiceItemId(orm_item.id),
            description=orm_item.description,
            item_code=orm_item.item_code,
            type=InvoiceItemType(orm_item.type),
            quantity=orm_item.quantity,
            unit=orm_item.unit,
            unit_price=orm_item.unit_price,
            discount_percentage=orm_item.discount_percentage,
            discount_amount=orm_item.discount_amount,
            tax_rate=orm_item.tax_rate,
            tax_amount=orm_item.tax_amount,
            line_total=orm_item.line_total,
            notes=orm_item.notes,
            sort_order=orm_item.sort_order,
        )

    def to_orm(self, domain_entity: Invoice, orm_model: InvoiceORM | None = None) -> InvoiceORM:
        if orm_model is None:
            orm_model = InvoiceORM(
                invoice_number=domain_entity.invoice_number,
                customer_id=domain_entity.customer_id.value,
                created_by=_raw_id(domain_entity.created_by),
            )
        orm_model.shipment_id = _raw_id(domain_entity.shipment_id)
        orm_model.status = domain_entity.status
        orm_model.type = domain_entity.type
        orm_model.issue_date = domain_entity.issue_date
        orm_model.due_date = domain_entity.due_date
        orm_model.paid_date = domain_entity.paid_date
        orm_model.currency = domain_entity.currency
        orm_model.exchange_rate = domain_entity.exchange_rate
        orm_model.subtotal = domain_entity.subtotal
        orm_model.tax_amount = domain_entity.tax_amount
        orm_model.discount_amount = domain_entity.discount_amount
        orm_model.total_amount = domain_entity.total_amount
        orm_model.paid_amount = domain_entity.paid_amount
        orm_model.balance_due = domain_entity.balance_due
        orm_model.tax_rate = domain_entity.tax_rate
        orm_model.tax_type = domain_entity.tax_type
        orm_model.billing_address = dict(domain_entity.billing_address)
        orm_model.company_address = dict(domain_entity.company_address)
        orm_model.notes = domain_entity.notes
        orm_model.terms_conditions = domain_entity.terms_conditions
        orm_model.payment_terms = domain_entity.payment_terms
        orm_model.sent_by = _raw_id(domain_entity.sent_by)
        orm_model.sent_at = domain_entity.sent_at
        orm_model.viewed_at = domain_entity.viewed_at
        orm_model.view_count = domain_entity.view_count
        orm_model.cancelled_at = domain_entity.cancelled_at
        orm_model.cancelled_by = _raw_id(domain_entity.cancelled_by)
        orm_model.cancellation_reason = domain_entity.cancellation_reason
        self._sync_items(domain_entity, orm_model)
        return orm_model

    def _sync_items(self, domain_entity: Invoice, orm_model: InvoiceORM) -> None:
        existing = {item.id: item for item in orm_model.items}
        synced: list[InvoiceItemORM] = []
        for item in domain_entity.items:
            orm_item = existing.get(item.id.value) or InvoiceItemORM()
            orm_item.description = item.description
            orm_item.item_code = item.item_code
            orm_item.type = item.type
            orm_item.quantity = item.quantity
            orm_item.unit = item.unit
            orm_item.unit_price = item.unit_price
            orm_item.discount_percentage = item.discount_percentage
            orm_item.discount_amount = item.discount_amount
            orm_item.line_total = item.line_total
            orm_item.tax_rate = item.tax_rate
            orm_item.tax_amount = item.tax_amount
            orm_item.notes = item.notes
            orm_item.sort_order = item.sort_order
            synced.append(orm_item)
        orm_model.items = synced
