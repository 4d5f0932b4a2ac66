"""Mapper for CustomsDeclaration ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.ids import (
    CustomsDeclarationId,
    CustomsItemId,
    ShipmentId,
    UserId,
)
from cargodesk.domain.customs.entities.customs_declaration import (
    CustomsDeclaration,
    CustomsItem,
    CustomsShipmentType,
    DeclarationStatus,
    DeclarationType,
)
from cargodesk.models import CustomsDeclaration as CustomsDeclarationORM
from cargodesk.models import CustomsItem as CustomsItemORM
from cargodesk.utils import ensure_utc

# Declaration columns that map one to one onto the aggregate
_PLAIN_FIELDS = (
    "origin_country",
    "destination_country",
    "incoterms",
    "currency",
    "total_value",
    "insurance_value",
    "freight_charges",
    "estimated_duties",
    "estimated_taxes",
    "description_of_goods",
    "reason_for_export",
    "contains_batteries",
    "contains_liquids",
    "contains_dangerous_goods",
    "submitted_at",
    "approved_at",
    "cleared_at",
    "rejection_reason",
    "customs_response",
    "customs_reference",
)


class CustomsDeclarationMapper:
    def to_domain(self, orm_model: CustomsDeclarationORM) -> CustomsDeclaration:
        return CustomsDeclaration(
            id=CustomsDeclarationId(orm_model.id),
            declaration_number=orm_model.declaration_number,
            shipment_id=ShipmentId(orm_model.shipment_id),
            origin_country=orm_model.origin_country,
            destination_country=orm_model.destination_country,
            description_of_goods=orm_model.description_of_goods,
            currency=orm_model.currency,
            exporter_details=dict(orm_model.exporter_details or {}),
            importer_details=dict(orm_model.importer_details or {}),
            declaration_type=DeclarationType(orm_model.declaration_type),
            shipment_type=CustomsShipmentType(orm_model.shipment_type),
            incoterms=orm_model.incoterms,
            total_value=orm_model.total_value,
            insurance_value=orm_model.insurance_value,
            freight_charges=orm_model.freight_charges,
            estimated_duties=orm_model.estimated_duties,
            estimated_taxes=orm_model.estimated_taxes,
            reason_for_export=orm_model.reason_for_export,
            contains_batteries=orm_model.contains_batteries,
            contains_liquids=orm_model.contains_liquids,
            contains_dangerous_goods=orm_model.contains_dangerous_goods,
            status=DeclarationStatus(orm_model.status),
            submitted_at=ensure_utc(orm_model.submitted_at),
            approved_at=ensure_utc(orm_model.approved_at),
            cleared_at=ensure_utc(orm_model.cleared_at),
            rejection_reason=orm_model.rejection_reason,
            customs_response=orm_model.customs_response,
            customs_reference=orm_model.customs_reference,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            items=[self._item_to_domain(item) for item in orm_model.items],
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def _item_to_domain(self, orm_item: CustomsItemORM) -> CustomsItem:
        return CustomsItem(
            id=CustomsItemId(orm_item.id),
            description=orm_item.description,
            hs_code=orm_item.hs_code,
            country_of_origin=orm_item.country_of_origin,
            quantity=orm_item.quantity,
            unit_weight=orm_item.unit_weight,
            unit_value=orm_item.unit_value,
            estimated_duty_rate=orm_item.estimated_duty_rate,
            estimated_tax_rate=orm_item.estimated_tax_rate,
        )

    def to_orm(
        self,
        domain_entity: CustomsDeclaration,
        orm_model: CustomsDeclarationORM | None = None,
    ) -> CustomsDeclarationORM:
        if orm_model is None:
            orm_model = CustomsDeclarationORM(
                declaration_number=domain_entity.declaration_number,
                shipment_id=domain_entity.shipment_id.value,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
        for name in _PLAIN_FIELDS:
            setattr(orm_model, name, getattr(domain_entity, name))
        orm_model.declaration_type = domain_entity.declaration_type
        orm_model.shipment_type = domain_entity.shipment_type
        orm_model.status = domain_entity.status
        orm_model.exporter_details = dict(domain_entity.exporter_details)
        orm_model.importer_details = dict(domain_entity.importer_details)
        self._sync_items(domain_entity, orm_model)
        return orm_model

    def _sync_items(
        self, domain_entity: CustomsDeclaration, orm_model: CustomsDeclarationORM
    ) -> None:
        existing = {item.id: item for item in orm_model.items}
        synced: list[CustomsItemORM] = []
        for item in domain_entity.items:
            orm_item = existing.get(item.id.value) or CustomsItemORM()
            orm_item.description = item.description
            orm_item.hs_code = item.hs_code
            orm_item.country_of_origin = item.country_of_origin
            orm_item.quantity = item.quantity
            orm_item.unit_weight = item.unit_weight
            orm_item.unit_value = item.unit_value
            orm_item.total_value = item.total_value
            orm_item.estimated_duty_rate = item.estimated_duty_rate
            orm_item.estimated_duty_amount = item.estimated_duty_amount
            orm_item.estimated_tax_rate = item.estimated_tax_rate
            orm_item.estimated_tax_amount = item.estimated_tax_amount
            synced.append(orm_item)
        orm_model.items = synced
