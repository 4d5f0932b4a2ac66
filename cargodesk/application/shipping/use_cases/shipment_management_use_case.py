"""
Shipment management use case.

Handles registration, tracking updates and the public tracking lookup, and
tells the customer whenever a shipment changes status.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.application.notifications.services.customer_notifier import CustomerNotifier
from cargodesk.application.shipping.protocols.shipment_repository import (
    ShipmentRepositoryProtocol,
)
from cargodesk.application.warehouses.protocols.warehouse_repository import (
    WarehouseRepositoryProtocol,
)
from cargodesk.domain.common.exceptions import BusinessRuleViolationError
from cargodesk.domain.common.value_objects.ids import CustomerId, ShipmentId, UserId, WarehouseId
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.domain.notifications.entities.notification import NotificationPriority
from cargodesk.domain.shipping.entities.shipment import (
    ServiceType,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    ShipmentStatusChanged,
)
from cargodesk.domain.shipping.exceptions import ShipmentNotFoundError
from cargodesk.domain.shipping.services.tracking_history_generator import (
    MAX_STEP_HOURS,
    STATUS_NOTES,
    TrackingHistoryGenerator,
    status_path,
)
from cargodesk.domain.warehouses.entities.warehouse import Warehouse
from cargodesk.domain.warehouses.exceptions import WarehouseNotFoundError

logger = structlog.get_logger(__name__)

UNKNOWN_LOCATION = "Unknown"

# status -> (notification type, title, message, priority)
_STATUS_MESSAGES: dict[ShipmentStatus, tuple[str, str, str, NotificationPriority]] = {
    ShipmentStatus.PENDING: (
        "shipment_created",
        "Shipment Created - {tracking}",
        "Your shipment {tracking} has been created and is being processed.",
        NotificationPriority.MEDIUM,
    ),
    ShipmentStatus.PICKED_UP: (
        "shipment_picked_up",
        "Shipment Picked Up - {tracking}",
        "Your shipment {tracking} has been picked up and is on its way.",
        NotificationPriority.MEDIUM,
    ),
    ShipmentStatus.IN_TRANSIT: (
        "shipment_in_transit",
        "Shipment In Transit - {tracking}",
        "Your shipment {tracking} is currently in transit to {recipient}.",
        NotificationPriority.LOW,
    ),
    ShipmentStatus.OUT_FOR_DELIVERY: (
        "shipment_in_transit",
        "Out for Delivery - {tracking}",
        "Your shipment {tracking} is out for delivery to {recipient}.",
        NotificationPriority.LOW,
    ),
    ShipmentStatus.DELIVERED: (
        "shipment_delivered",
        "Package Delivered - {tracking}",
        "Your shipment {tracking} has been successfully delivered to {recipient}.",
        NotificationPriority.HIGH,
    ),
    ShipmentStatus.EXCEPTION: (
        "shipment_exception",
        "Delivery Exception - {tracking}",
        "There was an issue with the delivery of shipment {tracking}. "
        "Please contact support for assistance.",
        NotificationPriority.URGENT,
    ),
    ShipmentStatus.CANCELLED: (
        "shipment_cancelled",
        "Shipment Cancelled - {tracking}",
        "Your shipment {tracking} has been cancelled.",
        NotificationPriority.MEDIUM,
    ),
}


class ShipmentManagementUseCase:
    """Use case for shipment operations."""

    def __init__(
        self,
        shipment_repository: ShipmentRepositoryProtocol,
        customer_repository: CustomerRepositoryProtocol,
        warehouse_repository: WarehouseRepositoryProtocol,
        customer_notifier: CustomerNotifier,
        history_generator: TrackingHistoryGenerator,
        tracking_url_format: str = "/track/{tracking_number}",
    ) -> None:
        self.shipment_repository = shipment_repository
        self.customer_repository = customer_repository
        self.warehouse_repository = warehouse_repository
        self.customer_notifier = customer_notifier
        self.history_generator = history_generator
        self.tracking_url_format = tracking_url_format

    def create_shipment(
        self,
        customer_id: int,
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
        created_by: int | None = None,
        origin_warehouse_id: int | None = None,
        destination_warehouse_id: int | None = None,
        initial_status: ShipmentStatus = ShipmentStatus.PENDING,
        items: list[ShipmentItem] | None = None,
        **optional: object,
    ) -> Shipment:
        """
        Register a shipment with a fresh tracking number.

        A shipment entered already past pending gets a backfilled tracking
        history that ends now.

        Raises:
            CustomerNotFoundError: If customer is not found
            WarehouseNotFoundError: If a referenced warehouse is not found
        """
        customer = self.customer_repository.find_by_id(CustomerId(customer_id))
        if not customer:
            raise CustomerNotFoundError(customer_id)
        origin = self._warehouse_or_none(origin_warehouse_id)
        self._warehouse_or_none(destination_warehouse_id)

        now = datetime.now(UTC)
        recorded_by = UserId(created_by) if created_by else None
        # Backfilled history starts at creation and must not run past now
        created_at = now
        if initial_status != ShipmentStatus.PENDING:
            steps = len(status_path(initial_status)) - 1
            created_at = now - timedelta(hours=steps * MAX_STEP_HOURS)
        shipment = Shipment.create(
            tracking_number=self.shipment_repository.next_tracking_number(now.date()),
            customer_id=customer.id,
            sender_name=sender_name,
            sender_phone=sender_phone,
            sender_address=sender_address,
            recipient_name=recipient_name,
            recipient_phone=recipient_phone,
            recipient_address=recipient_address,
            weight_kg=weight_kg,
            length_cm=length_cm,
            width_cm=width_cm,
            height_cm=height_cm,
            origin_warehouse_id=origin.id if origin else None,
            destination_warehouse_id=(
                WarehouseId(destination_warehouse_id) if destination_warehouse_id else None
            ),
            items=items or [],
            created_by=recorded_by,
            created_at=created_at,
            **optional,
        )

        location = origin.city if origin else UNKNOWN_LOCATION
        if initial_status == ShipmentStatus.PENDING:
            shipment.add_tracking_update(
                ShipmentStatus.PENDING,
                location,
                STATUS_NOTES[ShipmentStatus.PENDING],
                recorded_by,
                now,
            )
        else:
            shipment.record_history(
                self.history_generator.generate(initial_status, created_at, location, recorded_by)
            )

        shipment = self._save_and_notify(shipment, created_by)

        logger.info(
            "shipment_created",
            shipment_id=shipment.id.value,
            tracking_number=shipment.tracking_number,
            customer_id=customer_id,
            status=shipment.status,
        )
        return shipment

    def get_shipment(self, shipment_id: int, customer_id: int | None = None) -> Shipment:
        """
        Load a shipment, optionally limited to one customer's shipments.

        Raises:
            ShipmentNotFoundError: If not found, deleted, or owned by another customer
        """
        shipment = self.shipment_repository.find_by_id(ShipmentId(shipment_id))
        if not shipment or (
            customer_id is not None and shipment.customer_id.value != customer_id
        ):
            raise ShipmentNotFoundError(shipment_id)
        return shipment

    def track(self, tracking_number: str) -> Shipment:
        """Public lookup by tracking number."""
        shipment = self.shipment_repository.find_by_tracking_number(
            tracking_number.strip().upper()
        )
        if not shipment:
            raise ShipmentNotFoundError(tracking_number)
        return shipment

    def list_shipments(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: ShipmentStatus | None = None,
        service_type: ServiceType | None = None,
        customer_id: int | None = None,
    ) -> PaginatedResult[Shipment]:
        items, total = self.shipment_repository.search(
            pagination,
            search=search,
            status=status,
            service_type=service_type,
            customer_id=CustomerId(customer_id) if customer_id else None,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def update_shipment(self, shipment_id: int, **changes: object) -> Shipment:
        shipment = self.get_shipment(shipment_id)

        for key in ("origin_warehouse_id", "destination_warehouse_id"):
            if key in changes:
                warehouse = self._warehouse_or_none(changes[key])  # type: ignore[arg-type]
                changes[key] = warehouse.id if warehouse else None
        if "assigned_to" in changes:
            assignee = changes.pop("assigned_to")
            shipment.assign_to(UserId(assignee) if isinstance(assignee, int) else None)

        shipment.update_details(**changes)
        shipment = self.shipment_repository.save(shipment)

        logger.info("shipment_updated", shipment_id=shipment_id, fields=sorted(changes))
        return shipment

    def update_status(
        self,
        shipment_id: int,
        status: ShipmentStatus,
        location: str,
        notes: str | None = None,
        recorded_by: int | None = None,
        delivery_signature: str | None = None,
    ) -> Shipment:
        """
        Record a tracking update.

        Raises:
            ShipmentNotFoundError: If shipment is not found
            InvalidStatusTransitionError: If the shipment is delivered or cancelled
        """
        shipment = self.get_shipment(shipment_id)
        user = UserId(recorded_by) if recorded_by else None

        if status == ShipmentStatus.DELIVERED:
            shipment.mark_delivered(location, delivery_signature, notes, user)
        elif status == ShipmentStatus.CANCELLED:
            shipment.cancel(notes, user)
        else:
            shipment.add_tracking_update(status, location, notes or STATUS_NOTES[status], user)

        shipment = self._save_and_notify(shipment, recorded_by)

        logger.info(
            "shipment_status_updated",
            shipment_id=shipment_id,
            status=status,
            location=location,
        )
        return shipment

    def cancel_shipment(
        self,
        shipment_id: int,
        reason: str | None = None,
        recorded_by: int | None = None,
        customer_id: int | None = None,
    ) -> Shipment:
        shipment = self.get_shipment(shipment_id, customer_id)
        shipment.cancel(reason, UserId(recorded_by) if recorded_by else None)
        shipment = self._save_and_notify(shipment, recorded_by)
        logger.info("shipment_cancelled", shipment_id=shipment_id)
        return shipment

    def delete_shipment(self, shipment_id: int) -> None:
        """
        Raises:
            BusinessRuleViolationError: If the shipment already left pending
        """
        shipment = self.get_shipment(shipment_id)
        if shipment.status != ShipmentStatus.PENDING:
            raise BusinessRuleViolationError(
                "delete_pending_shipment", "Only pending shipments can be deleted"
            )
        self.shipment_repository.delete(shipment)
        logger.info("shipment_deleted", shipment_id=shipment_id)

    def _warehouse_or_none(self, warehouse_id: int | None) -> Warehouse | None:
        if not warehouse_id:
            return None
        warehouse = self.warehouse_repository.find_by_id(WarehouseId(warehouse_id))
        if not warehouse:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse

    def _save_and_notify(self, shipment: Shipment, acting_user: int | None) -> Shipment:
        is_new = shipment.id.value == 0
        events = shipment.collect_events()
        saved = self.shipment_repository.save(shipment)

        statuses = [
            ShipmentStatus(event.new_status)
            for event in events
            if isinstance(event, ShipmentStatusChanged)
        ]
        if is_new:
            statuses = [saved.status]
        for status in statuses:
            self._notify_status(saved, status, acting_user)
        return saved

    def _notify_status(
        self, shipment: Shipment, status: ShipmentStatus, acting_user: int | None
    ) -> None:
        notification_type, title, message, priority = _STATUS_MESSAGES[status]
        fields = {"tracking": shipment.tracking_number, "recipient": shipment.recipient_name}
        self.customer_notifier.notify_customer(
            customer_id=shipment.customer_id.value,
            notification_type=notification_type,
            title=title.format(**fields),
            message=message.format(**fields),
            priority=priority,
            related_type="shipment",
            related_id=shipment.id.value,
            data={
                "tracking_number": shipment.tracking_number,
                "status": str(status),
                "tracking_url": self.tracking_url_format.format(
                    tracking_number=shipment.tracking_number
                ),
            },
            created_by=acting_user,
        )
