"""
Delivery route use case.

Plans driver runs from shipments and carries stop outcomes through to the
shipments' tracking history.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.routing.protocols.delivery_route_repository import (
    DeliveryRouteRepositoryProtocol,
)
from cargodesk.application.routing.protocols.driver_repository import DriverRepositoryProtocol
from cargodesk.application.shipping.protocols.shipment_repository import (
    ShipmentRepositoryProtocol,
)
from cargodesk.application.shipping.use_cases.shipment_management_use_case import (
    ShipmentManagementUseCase,
)
from cargodesk.application.warehouses.protocols.warehouse_repository import (
    WarehouseRepositoryProtocol,
)
from cargodesk.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from cargodesk.domain.common.value_objects.ids import (
    DeliveryRouteId,
    DriverId,
    ShipmentId,
    UserId,
    WarehouseId,
)
from cargodesk.domain.routing.entities.delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopPriority,
    StopType,
)
from cargodesk.domain.routing.entities.driver import Driver
from cargodesk.domain.routing.exceptions import DeliveryRouteNotFoundError, DriverNotFoundError
from cargodesk.domain.routing.services.route_sequencer import RouteSequencer
from cargodesk.domain.shipping.entities.shipment import Shipment, ShipmentStatus
from cargodesk.domain.shipping.exceptions import ShipmentNotFoundError
from cargodesk.domain.warehouses.entities.warehouse import Warehouse
from cargodesk.domain.warehouses.exceptions import WarehouseNotFoundError

logger = structlog.get_logger(__name__)


class DeliveryRouteUseCase:
    """Use case for delivery route operations."""

    def __init__(
        self,
        route_repository: DeliveryRouteRepositoryProtocol,
        driver_repository: DriverRepositoryProtocol,
        warehouse_repository: WarehouseRepositoryProtocol,
        shipment_repository: ShipmentRepositoryProtocol,
        shipment_use_case: ShipmentManagementUseCase,
        sequencer: RouteSequencer,
    ) -> None:
        self.route_repository = route_repository
        self.driver_repository = driver_repository
        self.warehouse_repository = warehouse_repository
        self.shipment_repository = shipment_repository
        self.shipment_use_case = shipment_use_case
        self.sequencer = sequencer

    def create_route(
        self,
        driver_id: int,
        warehouse_id: int,
        delivery_date: date,
        stops: list[dict[str, Any]],
        planned_start_time: datetime | None = None,
        planned_end_time: datetime | None = None,
        notes: str | None = None,
        created_by: int | None = None,
    ) -> DeliveryRoute:
        """
        Plan a route and reserve its driver.

        Args:
            driver_id: Driver who will run the route
            warehouse_id: Warehouse the route starts from
            delivery_date: Day the route runs
            stops: One entry per stop, in visiting order, each with a
                ``shipment_id`` and ``type`` plus optional ``priority``,
                ``requires_signature``, ``is_fragile`` and ``delivery_notes``
            planned_start_time: Drives the planned arrival of every stop
            planned_end_time: Must be after the start time
            notes: Free text for the driver
            created_by: Staff user planning the route

        Returns:
            The saved route with sequenced stops

        Raises:
            DriverNotFoundError: If driver is not found
            WarehouseNotFoundError: If warehouse is not found
            ShipmentNotFoundError: If a stop's shipment is not found
            BusinessRuleViolationError: If the driver is not active and available
        """
        driver = self._driver(driver_id)
        warehouse = self._warehouse(warehouse_id)
        if not stops:
            raise ValidationError("A route needs at least one stop", field="stops")

        route = DeliveryRoute.create(
            route_number=self.route_repository.next_route_number(delivery_date),
            driver_id=driver.id,
            warehouse_id=warehouse.id,
            delivery_date=delivery_date,
            planned_start_time=planned_start_time,
            planned_end_time=planned_end_time,
            notes=notes,
            created_by=UserId(created_by) if created_by else None,
        )

        shipments: dict[int, Shipment] = {}
        route_stops = []
        for stop_data in stops:
            shipment_id = stop_data["shipment_id"]
            shipment = shipments.get(shipment_id) or self._shipment(shipment_id)
            shipments[shipment.id.value] = shipment
            route_stops.append(self._build_stop(shipment, stop_data))

        total_weight = sum((Decimal(s.weight_kg) for s in shipments.values()), Decimal("0"))
        self.sequencer.sequence(route, route_stops, warehouse.location, total_weight)

        driver.assign_route()
        route = self.route_repository.save(route)
        self.driver_repository.save(driver)

        logger.info(
            "delivery_route_created",
            route_id=route.id.value,
            route_number=route.route_number,
            driver_id=driver_id,
            total_stops=route.total_stops,
            total_distance=str(route.total_distance),
        )
        return route

    def get_route(self, route_id: int) -> DeliveryRoute:
        route = self.route_repository.find_by_id(DeliveryRouteId(route_id))
        if not route:
            raise DeliveryRouteNotFoundError(route_id)
        return route

    def list_routes(
        self,
        pagination: Pagination,
        delivery_date: date | None = None,
        driver_id: int | None = None,
        warehouse_id: int | None = None,
        status: RouteStatus | None = None,
    ) -> PaginatedResult[DeliveryRoute]:
        items, total = self.route_repository.search(
            pagination,
            delivery_date=delivery_date,
            driver_id=DriverId(driver_id) if driver_id else None,
            warehouse_id=WarehouseId(warehouse_id) if warehouse_id else None,
            status=status,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def start_route(self, route_id: int) -> DeliveryRoute:
        route = self.get_route(route_id)
        route.start()
        driver = self._driver(route.driver_id.value)
        driver.is_available = False

        route = self.route_repository.save(route)
        self.driver_repository.save(driver)
        logger.info("delivery_route_started", route_id=route_id)
        return route

    def arrive_at_stop(self, route_id: int, stop_id: int) -> DeliveryRoute:
        route = self.get_route(route_id)
        route.arrive_at_stop(stop_id)
        route = self.route_repository.save(route)
        logger.info("route_stop_arrived", route_id=route_id, stop_id=stop_id)
        return route

    def complete_stop(
        self,
        route_id: int,
        stop_id: int,
        notes: str | None = None,
        signature: str | None = None,
        recorded_by: int | None = None,
    ) -> DeliveryRoute:
        """
        Mark a stop done and update its shipment.

        A delivery stop delivers the shipment. A pickup stop moves a pending
        shipment to picked up.
        """
        route = self.get_route(route_id)
        stop = route.complete_stop(stop_id, notes)

        if stop.is_delivery:
            self.shipment_use_case.update_status(
                stop.shipment_id.value,
                ShipmentStatus.DELIVERED,
                location=stop.address,
                notes=notes,
                recorded_by=recorded_by,
                delivery_signature=signature,
            )
        else:
            shipment = self._shipment(stop.shipment_id.value)
            if shipment.status == ShipmentStatus.PENDING:
                self.shipment_use_case.update_status(
                    shipment.id.value,
                    ShipmentStatus.PICKED_UP,
                    location=stop.address,
                    notes=notes,
                    recorded_by=recorded_by,
                )

        return self._save_progress(route, stop, "route_stop_completed")

    def fail_stop(
        self, route_id: int, stop_id: int, reason: str, recorded_by: int | None = None
    ) -> DeliveryRoute:
        """A failed delivery puts the shipment into exception."""
        route = self.get_route(route_id)
        stop = route.fail_stop(stop_id, reason)

        if stop.is_delivery:
            self.shipment_use_case.update_status(
                stop.shipment_id.value,
                ShipmentStatus.EXCEPTION,
                location=stop.address,
                notes=stop.failure_reason,
                recorded_by=recorded_by,
            )

        return self._save_progress(route, stop, "route_stop_failed")

    def cancel_route(self, route_id: int) -> DeliveryRoute:
        route = self.get_route(route_id)
        route.cancel()
        driver = self._driver(route.driver_id.value)
        driver.release()

        route = self.route_repository.save(route)
        self.driver_repository.save(driver)
        logger.info("delivery_route_cancelled", route_id=route_id)
        return route

    def optimize_route(self, route_id: int) -> DeliveryRoute:
        route = self.get_route(route_id)
        warehouse = self._warehouse(route.warehouse_id.value)
        before = route.total_distance

        self.sequencer.optimize(route, warehouse.location)
        route = self.route_repository.save(route)

        logger.info(
            "delivery_route_optimized",
            route_id=route_id,
            distance_before=str(before),
            distance_after=str(route.total_distance),
        )
        return route

    def delete_route(self, route_id: int) -> None:
        """
        Raises:
            BusinessRuleViolationError: If the route is under way or finished
        """
        route = self.get_route(route_id)
        if not route.is_deletable:
            raise BusinessRuleViolationError(
                "delete_unstarted_route", f"Cannot delete a {route.status} route"
            )
        if route.status == RouteStatus.PLANNED:
            driver = self._driver(route.driver_id.value)
            driver.release()
            self.driver_repository.save(driver)
        self.route_repository.delete(route)
        logger.info("delivery_route_deleted", route_id=route_id)

    def _save_progress(self, route: DeliveryRoute, stop: RouteStop, event: str) -> DeliveryRoute:
        if route.status == RouteStatus.COMPLETED:
            driver = self._driver(route.driver_id.value)
            driver.release(route.completed_deliveries)
            self.driver_repository.save(driver)

        route = self.route_repository.save(route)
        logger.info(
            event,
            route_id=route.id.value,
            stop_id=stop.id.value,
            shipment_id=stop.shipment_id.value,
            progress=route.progress_percentage,
            route_status=route.status,
        )
        return route

    def _build_stop(self, shipment: Shipment, stop_data: dict[str, Any]) -> RouteStop:
        stop_type = StopType(stop_data["type"])
        if stop_type == StopType.PICKUP:
            warehouse_id = shipment.origin_warehouse_id
            name, phone, fallback = (
                shipment.sender_name,
                shipment.sender_phone,
                shipment.sender_address,
            )
        else:
            warehouse_id = shipment.destination_warehouse_id
            name, phone, fallback = (
                shipment.recipient_name,
                shipment.recipient_phone,
                shipment.recipient_address,
            )

        warehouse = (
            self.warehouse_repository.find_by_id(warehouse_id) if warehouse_id else None
        )
        return RouteStop.create(
            shipment_id=shipment.id,
            stop_type=stop_type,
            customer_name=name,
            address=warehouse.address if warehouse else fallback,
            location=warehouse.location if warehouse else None,
            contact_phone=phone,
            priority=StopPriority(stop_data.get("priority") or StopPriority.MEDIUM),
            requires_signature=stop_data.get("requires_signature", True),
            is_fragile=stop_data.get("is_fragile", False),
            delivery_notes=stop_data.get("delivery_notes") or shipment.special_instructions,
        )

    def _driver(self, driver_id: int) -> Driver:
        driver = self.driver_repository.find_by_id(DriverId(driver_id))
        if not driver:
            raise DriverNotFoundError(driver_id)
        return driver

    def _warehouse(self, warehouse_id: int) -> Warehouse:
        warehouse = self.warehouse_repository.find_by_id(WarehouseId(warehouse_id))
        if not warehouse:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse

    def _shipment(self, shipment_id: int) -> Shipment:
        shipment = self.shipment_repository.find_by_id(ShipmentId(shipment_id))
        if not shipment:
            raise ShipmentNotFoundError(shipment_id)
        return shipment
