from datetime import date, datetime
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId, ShipmentId
from cargodesk.domain.shipping.entities.shipment import ServiceType, Shipment, ShipmentStatus


class ShipmentRepositoryProtocol(Protocol):
    def find_by_id(self, shipment_id: ShipmentId) -> Shipment | None: ...

    def find_by_tracking_number(self, tracking_number: str) -> Shipment | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: ShipmentStatus | None = None,
        service_type: ServiceType | None = None,
        customer_id: CustomerId | None = None,
    ) -> tuple[list[Shipment], int]: ...

    def count_created_since(self, customer_id: CustomerId, since: datetime) -> int:
        """Shipments the customer booked at or after ``since``."""
        ...

    def next_tracking_number(self, on: date) -> str: ...

    def save(self, shipment: Shipment) -> Shipment: ...

    def delete(self, shipment: Shipment) -> None: ...
