"""
Domain service that backfills a shipment's tracking history.

Used when a shipment is registered that is already past ``pending`` (for
example, goods that were picked up before being entered in the system).
The history walks a fixed status flow up to the target status and spaces
the events out in time, starting from the moment the shipment was created.
"""

import random
from datetime import datetime, timedelta

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.shipping.entities.shipment import ShipmentStatus, TrackingEvent

UNKNOWN_LOCATION = "Unknown"
MIN_STEP_HOURS = 2
MAX_STEP_HOURS = 24

STATUS_NOTES: dict[ShipmentStatus, str] = {
    ShipmentStatus.PENDING: "Shipment created and pending pickup",
    ShipmentStatus.PICKED_UP: "Package picked up from sender",
    ShipmentStatus.IN_TRANSIT: "Package in transit to destination",
    ShipmentStatus.OUT_FOR_DELIVERY: "Package out for delivery",
    ShipmentStatus.DELIVERED: "Package delivered successfully",
    ShipmentStatus.EXCEPTION: "Exception occurred during transit",
    ShipmentStatus.CANCELLED: "Shipment cancelled",
}

DELIVERY_FLOW: tuple[ShipmentStatus, ...] = (
    ShipmentStatus.PENDING,
    ShipmentStatus.PICKED_UP,
    ShipmentStatus.IN_TRANSIT,
    ShipmentStatus.OUT_FOR_DELIVERY,
    ShipmentStatus.DELIVERED,
)

# Off-path statuses branch off the delivery flow at a fixed point.
_BRANCHES: dict[ShipmentStatus, tuple[ShipmentStatus, ...]] = {
    ShipmentStatus.EXCEPTION: (
        ShipmentStatus.PENDING,
        ShipmentStatus.PICKED_UP,
        ShipmentStatus.IN_TRANSIT,
        ShipmentStatus.EXCEPTION,
    ),
    ShipmentStatus.CANCELLED: (ShipmentStatus.PENDING, ShipmentStatus.CANCELLED),
}


def status_path(final_status: ShipmentStatus) -> tuple[ShipmentStatus, ...]:
    """Statuses a shipment passes through to reach ``final_status``, in order."""
    if final_status in _BRANCHES:
        return _BRANCHES[final_status]
    return DELIVERY_FLOW[: DELIVERY_FLOW.index(final_status) + 1]


class TrackingHistoryGenerator:
    """Builds a plausible tracking history ending at a given status."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()  # noqa: S311

    def generate(
        self,
        final_status: ShipmentStatus,
        started_at: datetime,
        location: str | None = None,
        recorded_by: UserId | None = None,
    ) -> list[TrackingEvent]:
        """
        Build tracking events from ``pending`` up to ``final_status``.

        Args:
            final_status: Status the shipment is in now
            started_at: Timestamp of the first (pending) event
            location: City recorded on every event; "Unknown" when absent
            recorded_by: Staff user the events are attributed to

        Returns:
            Events oldest first, each 2-24 hours after the previous one

        Raises:
            ValidationError: If started_at is not timezone aware
        """
        if started_at.tzinfo is None:
            raise ValidationError("started_at must be timezone aware", field="started_at")

        place = location.strip() if location and location.strip() else UNKNOWN_LOCATION
        events: list[TrackingEvent] = []
        occurred_at = started_at

        for index, status in enumerate(status_path(final_status)):
            if index > 0:
                occurred_at += timedelta(hours=self._rng.randint(MIN_STEP_HOURS, MAX_STEP_HOURS))
            events.append(
                TrackingEvent.create(
                    status=status,
                    location=place,
                    occurred_at=occurred_at,
                    notes=STATUS_NOTES[status],
                    recorded_by=recorded_by,
                )
            )

        return events
