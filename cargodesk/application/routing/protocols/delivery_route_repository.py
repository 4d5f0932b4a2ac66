from datetime import date
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import DeliveryRouteId, DriverId, WarehouseId
from cargodesk.domain.routing.entities.delivery_route import DeliveryRoute, RouteStatus


class DeliveryRouteRepositoryProtocol(Protocol):
    def find_by_id(self, route_id: DeliveryRouteId) -> DeliveryRoute | None: ...

    def search(
        self,
        pagination: Pagination,
        delivery_date: date | None = None,
        driver_id: DriverId | None = None,
        warehouse_id: WarehouseId | None = None,
        status: RouteStatus | None = None,
    ) -> tuple[list[DeliveryRoute], int]: ...

    def next_route_number(self, on: date) -> str: ...

    def save(self, route: DeliveryRoute) -> DeliveryRoute: ...

    def delete(self, route: DeliveryRoute) -> None: ...
