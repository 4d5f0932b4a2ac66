"""Mapper for Shipment ORM ↔ Domain conversion, including items and tracking history."""

from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    ShipmentId,
    TrackingEventId,
    UserId,
    WarehouseId,
)
from cargodesk.domain.shipping.entities.shipment import (
    PackageType,
    ServiceType,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    TrackingEvent,
)
from cargodesk.models import Shipment as ShipmentORM
from cargodesk.models import ShipmentItem as ShipmentItemORM
from cargodesk.models import TrackingEvent as TrackingEventORM
from cargodesk.utils import ensure_utc


class ShipmentMapper:
    def to_domain(self, orm_model: ShipmentORM) -> Shipment:
        """
        Rebuild the aggregate.

        Uses the constructor directly so no domain events are recorded.
        """
        return Shipment(
            id=ShipmentId(orm_model.id),
            tracking_number=orm_model.tracking_number,
            customer_id=CustomerId(orm_model.customer_id),
            origin_warehouse_id=(
                WarehouseId(orm_model.origin_warehouse_id)
                if orm_model.origin_warehouse_id
                else None
            ),
            destination_warehouse_id=(
                WarehouseId(orm_model.destination_warehouse_id)
                if orm_model.destination_warehouse_id
                else None
            ),
            sender_name=orm_model.sender_name,
            sender_phone=orm_model.sender_phone,
            sender_address=orm_model.sender_address,
            recipient_name=orm_model.recipient_name,
            recipient_phone=orm_model.recipient_phone,
            recipient_address=orm_model.recipient_address,
            service_type=ServiceType(orm_model.service_type),
            package_type=PackageType(orm_model.package_type),
            weight_kg=orm_model.weight_kg,
            length_cm=orm_model.length_cm,
            width_cm=orm_model.width_cm,
            height_cm=orm_model.height_cm,
            declared_value=orm_model.declared_value,
            insurance_value=orm_model.insurance_value,
            special_instructions=orm_model.special_instructions,
            status=ShipmentStatus(orm_model.status),
            estimated_delivery_date=orm_model.estimated_delivery_date,
            actual_delivery_date=ensure_utc(orm_model.actual_delivery_date),
            delivery_signature=orm_model.delivery_signature,
            delivery_notes=orm_model.delivery_notes,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            assigned_to=UserId(orm_model.assigned_to) if orm_model.assigned_to else None,
            items=[
                ShipmentItem(
                    id=item.id,
                    description=item.description,
                    quantity=item.quantity,
                    weight_kg=item.weight_kg,
                    value=item.value,
                )
                for item in orm_model.items
            ],
            tracking_history=[self._event_to_domain(event) for event in orm_model.tracking_events],
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def _event_to_domain(self, orm_event: TrackingEventORM) -> TrackingEvent:
        return TrackingEvent(
            id=TrackingEventId(orm_event.id),
            status=ShipmentStatus(orm_event.status),
            location=orm_event.location,
            occurred_at=ensure_utc(orm_event.occurred_at),  # type: ignore[arg-type]
            notes=orm_event.notes,
            recorded_by=UserId(orm_event.recorded_by) if orm_event.recorded_by else None,
        )

    def to_orm(self, domain_entity: Shipment, orm_model: ShipmentORM | None = None) -> ShipmentORM:
        """
        Copy the aggregate onto a new or loaded ORM row.

        Items are synced by id. Tracking history is append-only, so only
        events that were never persisted are added.
        """
        if orm_model is None:
            orm_model = ShipmentORM(
                tracking_number=domain_entity.tracking_number,
                customer_id=domain_entity.customer_id.value,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
            if domain_entity.created_at:
                orm_model.created_at = domain_entity.created_at

        orm_model.origin_warehouse_id = (
            domain_entity.origin_warehouse_id.value if domain_entity.origin_warehouse_id else None
        )
        orm_model.destination_warehouse_id = (
            domain_entity.destination_warehouse_id.value
            if domain_entity.destination_warehouse_id
            else None
        )
        orm_model.sender_name = domain_entity.sender_name
        orm_model.sender_phone = domain_entity.sender_phone
        orm_model.sender_address = domain_entity.sender_address
        orm_model.recipient_name = domain_entity.recipient_name
        orm_model.recipient_phone = domain_entity.recipient_phone
        orm_model.recipient_address = domain_entity.recipient_address
        orm_model.service_type = domain_entity.service_type
        orm_model.package_type = domain_entity.package_type
        orm_model.weight_kg = domain_entity.weight_kg
        orm_model.length_cm = domain_entity.length_cm
        orm_model.width_cm = domain_entity.width_cm
        orm_model.height_cm = domain_entity.height_cm
        orm_model.declared_value = domain_entity.declared_value
        orm_model.insurance_value = domain_entity.insurance_value
        orm_model.special_instructions = domain_entity.special_instructions
        orm_model.status = domain_entity.status
        orm_model.estimated_delivery_date = domain_entity.estimated_delivery_date
        orm_model.actual_delivery_date = domain_entity.actual_delivery_date
        orm_model.delivery_signature = domain_entity.delivery_signature
        orm_model.delivery_notes = domain_entity.delivery_notes
        assignee = domain_entity.assigned_to
        orm_model.assigned_to = assignee.value if assignee else None

        self._sync_items(domain_entity, orm_model)
        for event in domain_entity.tracking_history:
            if event.id.value == 0:
                orm_model.tracking_events.append(
                    TrackingEventORM(
                        status=event.status,
                        location=event.location,
                        notes=event.notes,
                        occurred_at=event.occurred_at,
                        recorded_by=event.recorded_by.value if event.recorded_by else None,
                    )
                )
        return orm_model

    def _sync_items(self, domain_entity: Shipment, orm_model: ShipmentORM) -> None:
        existing = {item.id: item for item in orm_model.items}
        synced: list[ShipmentItemORM] = []
        for item in domain_entity.items:
            orm_item = existing.get(item.id) if item.id else None
            if orm_item is None:
                orm_item = ShipmentItemORM()
            orm_item.description = item.description
            orm_item.quantity = item.quantity
            orm_item.weight_kg = item.weight_kg
            orm_item.value = item.value
            synced.append(orm_item)
        orm_model.items = synced
