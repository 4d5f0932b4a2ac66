from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cargodesk.domain.shipping.entities.shipment import (
    PackageType,
    ServiceType,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    TrackingEvent,
)


class ShipmentItemSchema(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(1, ge=1)
    weight_kg: Decimal = Field(..., ge=0)
    value: Decimal = Field(Decimal("0"), ge=0, description="Declared value of the line")

    def to_domain(self) -> ShipmentItem:
        return ShipmentItem(
            description=self.description,
            quantity=self.quantity,
            weight_kg=self.weight_kg,
            value=self.value,
        )


class ShipmentCreateRequest(BaseModel):
    """Schema for registering a shipment."""

    customer_id: int | None = Field(
        None, description="Owning customer (ignored for customer users, who ship for themselves)"
    )
    origin_warehouse_id: int | None = None
    destination_warehouse_id: int | None = None
    sender_name: str = Field(..., min_length=1, max_length=255)
    sender_phone: str = Field(..., min_length=1, max_length=30)
    sender_address: str = Field(..., min_length=1)
    recipient_name: str = Field(..., min_length=1, max_length=255)
    recipient_phone: str = Field(..., min_length=1, max_length=30)
    recipient_address: str = Field(..., min_length=1)
    service_type: ServiceType = ServiceType.STANDARD
    package_type: PackageType = PackageType.PACKAGE
    weight_kg: Decimal = Field(..., gt=0)
    length_cm: Decimal = Field(..., gt=0)
    width_cm: Decimal = Field(..., gt=0)
    height_cm: Decimal = Field(..., gt=0)
    declared_value: Decimal = Field(Decimal("0"), ge=0)
    insurance_value: Decimal = Field(Decimal("0"), ge=0)
    special_instructions: str | None = None
    estimated_delivery_date: date | None = None
    initial_status: ShipmentStatus = Field(
        ShipmentStatus.PENDING,
        description="Status for shipments entered after the fact; history is backfilled",
    )
    items: list[ShipmentItemSchema] = Field(default_factory=list)


class ShipmentUpdateRequest(BaseModel):
    """Partial update of sender, recipient and package details."""

    origin_warehouse_id: int | None = None
    destination_warehouse_id: int | None = None
    sender_name: str | None = Field(None, min_length=1, max_length=255)
    sender_phone: str | None = Field(None, min_length=1, max_length=30)
    sender_address: str | None = Field(None, min_length=1)
    recipient_name: str | None = Field(None, min_length=1, max_length=255)
    recipient_phone: str | None = Field(None, min_length=1, max_length=30)
    recipient_address: str | None = Field(None, min_length=1)
    service_type: ServiceType | None = None
    package_type: PackageType | None = None
    weight_kg: Decimal | None = Field(None, gt=0)
    length_cm: Decimal | None = Field(None, gt=0)
    width_cm: Decimal | None = Field(None, gt=0)
    height_cm: Decimal | None = Field(None, gt=0)
    declared_value: Decimal | None = Field(None, ge=0)
    insurance_value: Decimal | None = Field(None, ge=0)
    special_instructions: str | None = None
    estimated_delivery_date: date | None = None
    assigned_to: int | None = Field(None, description="Staff user handling the shipment")


class ShipmentStatusUpdateRequest(BaseModel):
    status: ShipmentStatus
    location: str = Field(..., min_length=1, max_length=255)
    notes: str | None = None
    delivery_signature: str | None = Field(None, max_length=255)


class ShipmentCancelRequest(BaseModel):
    reason: str | None = Field(None, description="Why the shipment is cancelled")


class TrackingEventResponse(BaseModel):
    status: ShipmentStatus
    location: str
    notes: str | None
    occurred_at: datetime

    @classmethod
    def from_domain(cls, event: TrackingEvent) -> "TrackingEventResponse":
        return cls(
            status=event.status,
            location=event.location,
            notes=event.notes,
            occurred_at=event.occurred_at,
        )


def _history_newest_first(shipment: Shipment) -> list[TrackingEventResponse]:
    events = sorted(
        shipment.tracking_history,
        key=lambda event: (event.occurred_at, event.id.value),
        reverse=True,
    )
    return [TrackingEventResponse.from_domain(event) for event in events]


class ShipmentResponse(BaseModel):
    id: int
    tracking_number: str
    customer_id: int
    origin_warehouse_id: int | None
    destination_warehouse_id: int | None
    sender_name: str
    sender_phone: str
    sender_address: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    service_type: ServiceType
    package_type: PackageType
    weight_kg: Decimal
    length_cm: Decimal
    width_cm: Decimal
    height_cm: Decimal
    volumetric_weight: Decimal
    billable_weight: Decimal
    declared_value: Decimal
    insurance_value: Decimal
    special_instructions: str | None
    status: ShipmentStatus
    estimated_delivery_date: date | None
    actual_delivery_date: datetime | None
    delivery_signature: str | None
    delivery_notes: str | None
    is_overdue: bool
    requires_customs_declaration: bool
    assigned_to: int | None
    items: list[ShipmentItemSchema]
    tracking_history: list[TrackingEventResponse] = Field(..., description="Newest first")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, shipment: Shipment) -> "ShipmentResponse":
        return cls(
            id=shipment.id.value,
            tracking_number=shipment.tracking_number,
            customer_id=shipment.customer_id.value,
            origin_warehouse_id=(
                shipment.origin_warehouse_id.value if shipment.origin_warehouse_id else None
            ),
            destination_warehouse_id=(
                shipment.destination_warehouse_id.value
                if shipment.destination_warehouse_id
                else None
            ),
            sender_name=shipment.sender_name,
            sender_phone=shipment.sender_phone,
            sender_address=shipment.sender_address,
            recipient_name=shipment.recipient_name,
            recipient_phone=shipment.recipient_phone,
            recipient_address=shipment.recipient_address,
            service_type=shipment.service_type,
            package_type=shipment.package_type,
            weight_kg=shipment.weight_kg,
            length_cm=shipment.length_cm,
            width_cm=shipment.width_cm,
            height_cm=shipment.height_cm,
            volumetric_weight=shipment.volumetric_weight,
            billable_weight=shipment.billable_weight,
            declared_value=shipment.declared_value,
            insurance_value=shipment.insurance_value,
            special_instructions=shipment.special_instructions,
            status=shipment.status,
            estimated_delivery_date=shipment.estimated_delivery_date,
            actual_delivery_date=shipment.actual_delivery_date,
            delivery_signature=shipment.delivery_signature,
            delivery_notes=shipment.delivery_notes,
            is_overdue=shipment.is_overdue(),
            requires_customs_declaration=shipment.requires_customs_declaration,
            assigned_to=shipment.assigned_to.value if shipment.assigned_to else None,
            items=[
                ShipmentItemSchema(
                    description=item.description,
                    quantity=item.quantity,
                    weight_kg=item.weight_kg,
                    value=item.value,
                )
                for item in shipment.items
            ],
            tracking_history=_history_newest_first(shipment),
            created_at=shipment.created_at,
            updated_at=shipment.updated_at,
        )


class PublicTrackingResponse(BaseModel):
    """What anyone holding the tracking number may see."""

    tracking_number: str
    status: ShipmentStatus
    service_type: ServiceType
    estimated_delivery_date: date | None
    actual_delivery_date: datetime | None
    recipient_name: str
    tracking_history: list[TrackingEventResponse]

    @classmethod
    def from_domain(cls, shipment: Shipment) -> "PublicTrackingResponse":
        return cls(
            tracking_number=shipment.tracking_number,
            status=shipment.status,
            service_type=shipment.service_type,
            estimated_delivery_date=shipment.estimated_delivery_date,
            actual_delivery_date=shipment.actual_delivery_date,
            recipient_name=shipment.recipient_name,
            tracking_history=_history_newest_first(shipment),
        )
