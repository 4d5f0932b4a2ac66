"""Tests for the DeliveryRoute aggregate."""

from datetime import UTC, date, datetime

import pytest

from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import (
    DriverId,
    RouteStopId,
    ShipmentId,
    WarehouseId,
)
from cargodesk.domain.routing.entities.delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopStatus,
    StopType,
)


def _route(stop_count: int = 2) -> DeliveryRoute:
    route = DeliveryRoute.create(
        "RTE-20261020-001", DriverId(1), WarehouseId(1), date(2026, 10, 20)
    )
    for position in range(1, stop_count + 1):
        stop = RouteStop.create(
            shipment_id=ShipmentId(position),
            stop_type=StopType.DELIVERY,
            customer_name=f"Recipient {position}",
            address="Somewhere",
        )
        stop.id = RouteStopId(position)
        stop.stop_order = position
        route.stops.append(stop)
    route.total_stops = stop_count
    return route


def _in_transit(route: DeliveryRoute) -> list[int]:
    return [stop.stop_order for stop in route.stops if stop.status == StopStatus.IN_TRANSIT]


class TestDeliveryRoute:
    """Test suite for the route stop flow."""

    def test_start_puts_first_stop_in_transit(self) -> None:
        route = _route()

        route.start()

        assert route.status == RouteStatus.IN_PROGRESS
        assert route.stops[0].status == StopStatus.IN_TRANSIT
        assert route.current_stop() is route.stops[0]

    def test_route_without_stops_cannot_start(self) -> None:
        with pytest.raises(BusinessRuleViolationError):
            _route(stop_count=0).start()

    def test_progress_and_completion(self) -> None:
        route = _route()
        route.start()

        route.arrive_at_stop(1)
        route.complete_stop(1, notes="Signed")
        assert route.progress_percentage == 50.0
        assert route.stops[1].status == StopStatus.IN_TRANSIT

        route.fail_stop(2, "Gate locked")
        assert route.status == RouteStatus.COMPLETED
        assert route.completed_deliveries == 1
        assert route.actual_end_time is not None

    def test_out_of_order_completion_keeps_one_stop_underway(self) -> None:
        route = _route(stop_count=3)
        route.start()

        route.complete_stop(3)
        assert _in_transit(route) == [1]
        assert route.stops[1].status == StopStatus.PENDING

        route.complete_stop(1)
        assert _in_transit(route) == [2]

    def test_arriving_elsewhere_puts_next_stop_back_in_queue(self) -> None:
        route = _route(stop_count=3)
        route.start()

        route.arrive_at_stop(2)

        assert route.stops[0].status == StopStatus.PENDING
        assert route.stops[1].status == StopStatus.ARRIVED

        route.complete_stop(2)
        assert route.stops[0].status == StopStatus.IN_TRANSIT
        assert route.stops[2].status == StopStatus.PENDING

    def test_stops_need_started_route(self) -> None:
        with pytest.raises(BusinessRuleViolationError):
            _route().complete_stop(1)

    def test_unknown_stop(self) -> None:
        route = _route()
        route.start()

        with pytest.raises(BusinessRuleViolationError):
            route.arrive_at_stop(99)

    def test_finished_stop_cannot_fail(self) -> None:
        route = _route()
        route.start()
        route.complete_stop(1)

        with pytest.raises(InvalidStatusTransitionError):
            route.fail_stop(1, "Too late")

    def test_fail_needs_reason(self) -> None:
        route = _route()
        route.start()

        with pytest.raises(ValidationError):
            route.fail_stop(1, "")

    def test_cancel_only_planned(self) -> None:
        route = _route()
        route.start()

        with pytest.raises(InvalidStatusTransitionError):
            route.cancel()
        assert route.is_deletable is False

    def test_end_before_start(self) -> None:
        with pytest.raises(ValidationError):
            DeliveryRoute.create(
                "RTE-20261020-001",
                DriverId(1),
                WarehouseId(1),
                date(2026, 10, 20),
                planned_start_time=datetime(2026, 10, 20, 8, 0, tzinfo=UTC),
                planned_end_time=datetime(2026, 10, 20, 7, 0, tzinfo=UTC),
            )
