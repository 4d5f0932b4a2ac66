"""
Shipment aggregate.

A shipment owns its goods lines and its tracking history. The current
status is always the status of the most recent tracking update.
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum

from cargodesk.domain.common.aggregate_root import AggregateRoot
from cargodesk.domain.common.domain_event import DomainEvent
from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from cargodesk.domain.common.value_objects.ids import (
    CustomerId,
    ShipmentId,
    TrackingEventId,
    UserId,
    WarehouseId,
)
from cargodesk.domain.common.value_objects.money import to_money

VOLUMETRIC_DIVISOR = Decimal(5000)
CUSTOMS_VALUE_THRESHOLD = Decimal(1000)


class ShipmentStatus(StrEnum):
    PENDING = "pending"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    EXCEPTION = "exception"
    CANCELLED = "cancelled"


class ServiceType(StrEnum):
    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"
    INTERNATIONAL = "international"


class PackageType(StrEnum):
    DOCUMENT = "document"
    PACKAGE = "package"
    PALLET = "pallet"
    CONTAINER = "container"


IN_TRANSIT_STATUSES = frozenset(
    {ShipmentStatus.PICKED_UP, ShipmentStatus.IN_TRANSIT, ShipmentStatus.OUT_FOR_DELIVERY}
)
FINAL_STATUSES = frozenset({ShipmentStatus.DELIVERED, ShipmentStatus.CANCELLED})
CANCELLABLE_STATUSES = frozenset({ShipmentStatus.PENDING, ShipmentStatus.PICKED_UP})


def volumetric_weight(length_cm: Decimal, width_cm: Decimal, height_cm: Decimal) -> Decimal:
    """Dimensional weight in kg (L x W x H / 5000)."""
    volume = Decimal(length_cm) * Decimal(width_cm) * Decimal(height_cm)
    return (volume / VOLUMETRIC_DIVISOR).quantize(Decimal("0.01"))


def billable_weight(
    weight_kg: Decimal, length_cm: Decimal, width_cm: Decimal, height_cm: Decimal
) -> Decimal:
    """The greater of actual and dimensional weight."""
    return max(Decimal(weight_kg), volumetric_weight(length_cm, width_cm, height_cm))


@dataclass(frozen=True)
class ShipmentStatusChanged(DomainEvent):
    shipment_id: ShipmentId = field(default_factory=ShipmentId.generate)
    customer_id: CustomerId = field(default_factory=CustomerId.generate)
    tracking_number: str = ""
    old_status: str = ""
    new_status: str = ""
    location: str = ""


@dataclass
class ShipmentItem:
    """A line of goods packed in the shipment."""

    description: str
    quantity: int
    weight_kg: Decimal
    value: Decimal
    id: int = 0

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Item description cannot be empty", field="description")
        if self.quantity < 1:
            raise ValidationError(
                "Item quantity must be at least 1", field="quantity", value=self.quantity
            )
        if self.weight_kg < 0 or self.value < 0:
            raise ValidationError("Item weight and value cannot be negative", field="items")
        self.value = to_money(self.value)


@dataclass
class TrackingEvent(Entity[TrackingEventId]):
    """A single entry of the tracking history."""

    id: TrackingEventId
    status: ShipmentStatus
    location: str
    occurred_at: datetime
    notes: str | None = None
    recorded_by: UserId | None = None

    @classmethod
    def create(
        cls,
        status: ShipmentStatus,
        location: str,
        occurred_at: datetime,
        notes: str | None = None,
        recorded_by: UserId | None = None,
    ) -> "TrackingEvent":
        if not location or not location.strip():
            raise ValidationError("Tracking location cannot be empty", field="location")
        return cls(
            id=TrackingEventId.generate(),
            status=status,
            location=location.strip(),
            occurred_at=occurred_at,
            notes=notes,
            recorded_by=recorded_by,
        )


@dataclass
class Shipment(AggregateRoot[ShipmentId]):
    """
    A parcel or cargo consignment moving between warehouses.

    Business Rules:
    - Weight and every dimension must be positive
    - Declared and insured values cannot be negative
    - Delivered and cancelled shipments accept no further tracking updates
    - Only pending or picked up shipments can be cancelled
    """

    id: ShipmentId
    tracking_number: str
    customer_id: CustomerId
    sender_name: str
    sender_phone: str
    sender_address: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    weight_kg: Decimal
    length_cm: Decimal
    width_cm: Decimal
    height_cm: Decimal
    service_type: ServiceType = ServiceType.STANDARD
    package_type: PackageType = PackageType.PACKAGE
    origin_warehouse_id: WarehouseId | None = None
    destination_warehouse_id: WarehouseId | None = None
    declared_value: Decimal = Decimal("0.00")
    insurance_value: Decimal = Decimal("0.00")
    special_instructions: str | None = None
    status: ShipmentStatus = ShipmentStatus.PENDING
    estimated_delivery_date: date | None = None
    actual_delivery_date: datetime | None = None
    delivery_signature: str | None = None
    delivery_notes: str | None = None
    created_by: UserId | None = None
    assigned_to: UserId | None = None
    items: list[ShipmentItem] = field(default_factory=list)
    tracking_history: list[TrackingEvent] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        for field_name in (
            "sender_name",
            "sender_phone",
            "sender_address",
            "recipient_name",
            "recipient_phone",
            "recipient_address",
        ):
            if not getattr(self, field_name, "").strip():
                raise ValidationError(
                    f"{field_name.replace('_', ' ').capitalize()} cannot be empty",
                    field=field_name,
                )
        for field_name in ("weight_kg", "length_cm", "width_cm", "height_cm"):
            value = getattr(self, field_name)
            if value is None or Decimal(value) <= 0:
                raise ValidationError(
                    f"{field_name} must be greater than zero", field=field_name, value=value
                )
        self.declared_value = to_money(self.declared_value)
        self.insurance_value = to_money(self.insurance_value)
        if self.declared_value < 0 or self.insurance_value < 0:
            raise ValidationError("Declared and insured values cannot be negative")

    # Derived values

    @property
    def volumetric_weight(self) -> Decimal:
        return volumetric_weight(self.length_cm, self.width_cm, self.height_cm)

    @property
    def billable_weight(self) -> Decimal:
        return billable_weight(self.weight_kg, self.length_cm, self.width_cm, self.height_cm)

    @property
    def is_delivered(self) -> bool:
        return self.status == ShipmentStatus.DELIVERED

    @property
    def is_in_transit(self) -> bool:
        return self.status in IN_TRANSIT_STATUSES

    @property
    def has_exception(self) -> bool:
        return self.status == ShipmentStatus.EXCEPTION

    def is_overdue(self, today: date | None = None) -> bool:
        """Past the estimated delivery date and still open."""
        if self.estimated_delivery_date is None or self.status in FINAL_STATUSES:
            return False
        today = today or datetime.now(UTC).date()
        return self.estimated_delivery_date < today

    @property
    def requires_customs_declaration(self) -> bool:
        return (
            self.service_type == ServiceType.INTERNATIONAL
            or self.declared_value > CUSTOMS_VALUE_THRESHOLD
        )

    @property
    def latest_event(self) -> TrackingEvent | None:
        if not self.tracking_history:
            return None
        return max(self.tracking_history, key=lambda event: event.occurred_at)

    # Behaviour

    def add_tracking_update(
        self,
        status: ShipmentStatus,
        location: str,
        notes: str | None = None,
        recorded_by: UserId | None = None,
        occurred_at: datetime | None = None,
    ) -> TrackingEvent:
        """
        Append a tracking event and move the shipment to its status.

        Raises:
            InvalidStatusTransitionError: If the shipment is already delivered or cancelled
        """
        if self.status in FINAL_STATUSES:
            raise InvalidStatusTransitionError("shipment", self.status, status)

        event = TrackingEvent.create(
            status=status,
            location=location,
            occurred_at=occurred_at or datetime.now(UTC),
            notes=notes,
            recorded_by=recorded_by,
        )
        self.tracking_history.append(event)
        self._apply_status(status, location, event.occurred_at)
        return event

    def record_history(self, events: list[TrackingEvent]) -> None:
        """Attach pre-built history (oldest first) and adopt the latest status."""
        if not events:
            return
        self.tracking_history.extend(events)
        last = events[-1]
        self._apply_status(last.status, last.location, last.occurred_at)

    def mark_delivered(
        self,
        location: str,
        signature: str | None = None,
        notes: str | None = None,
        recorded_by: UserId | None = None,
    ) -> TrackingEvent:
        event = self.add_tracking_update(
            ShipmentStatus.DELIVERED,
            location,
            notes or "Package delivered successfully",
            recorded_by,
        )
        self.delivery_signature = signature
        self.delivery_notes = notes
        return event

    def cancel(self, reason: str | None = None, recorded_by: UserId | None = None) -> None:
        """
        Cancel a shipment that has not left the sender's hands for long.

        Raises:
            InvalidStatusTransitionError: If the shipment is past pickup
        """
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidStatusTransitionError("shipment", self.status, ShipmentStatus.CANCELLED)
        location = self.latest_event.location if self.latest_event else "Unknown"
        self.add_tracking_update(
            ShipmentStatus.CANCELLED, location, reason or "Shipment cancelled", recorded_by
        )

    def assign_to(self, user_id: UserId | None) -> None:
        self.assigned_to = user_id

    def update_details(self, **changes: object) -> None:
        """
        Apply partial changes to sender, recipient and package details.

        Raises:
            ValidationError: If the shipment is closed or a change is invalid
        """
        if self.status in FINAL_STATUSES:
            raise ValidationError(f"Cannot edit a {self.status} shipment", field="status")
        for key, value in changes.items():
            if key in ("id", "tracking_number", "status", "tracking_history", "customer_id"):
                raise ValidationError(f"{key} cannot be changed", field=key)
            if not hasattr(self, key):
                raise ValidationError(f"Unknown shipment field {key}", field=key)
            setattr(self, key, value)
        self.__post_init__()

    def _apply_status(self, status: ShipmentStatus, location: str, at: datetime) -> None:
        old_status = self.status
        self.status = status
        if status == ShipmentStatus.DELIVERED:
            self.actual_delivery_date = at
        if old_status != status:
            self._record_event(
                ShipmentStatusChanged(
                    shipment_id=self.id,
                    customer_id=self.customer_id,
                    tracking_number=self.tracking_number,
                    old_status=old_status,
                    new_status=status,
                    location=location,
                )
            )

    @classmethod
    def create(
        cls,
        tracking_number: str,
        customer_id: CustomerId,
        sender_name: str,
        sender_phone: str,
        sender_address: str,
        recipient_name: str,
        recipient_phone: str,
        recipient_address: str,
        weight_kg: Decimal,
        length_cm: Decimal,
        width_cm: Decimal,
        height_cm: Decimal,
        **optional: object,
    ) -> "Shipment":
        """Create a new pending shipment (ID will be 0 until persisted)."""
        return cls(
            id=ShipmentId.generate(),
            tracking_number=tracking_number,
            customer_id=customer_id,
            sender_name=sender_name.strip(),
            sender_phone=sender_phone.strip(),
            sender_address=sender_address.strip(),
            recipient_name=recipient_name.strip(),
            recipient_phone=recipient_phone.strip(),
            recipient_address=recipient_address.strip(),
            weight_kg=weight_kg,
            length_cm=length_cm,
            width_cm=width_cm,
            height_cm=height_cm,
            **optional,  # type: ignore[arg-type]
        )
