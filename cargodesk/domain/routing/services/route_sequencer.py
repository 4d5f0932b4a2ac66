"""
Domain service for ordering the stops of a delivery route.

Pure domain logic: distances are haversine kilometres between stop
coordinates, timings are fixed travel and service allowances per stop.
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from cargodesk.domain.common.exceptions import BusinessRuleViolationError
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.routing.entities.delivery_route import (
    DeliveryRoute,
    RouteStatus,
    RouteStop,
    StopPriority,
)

TRAVEL_MINUTES_PER_STOP = 30
SERVICE_MINUTES_PER_STOP = 20
TRAVEL_HOURS_PER_STOP = Decimal("0.5")
SERVICE_HOURS_PER_STOP = Decimal("0.33")
RUSH_PRIORITIES = frozenset({StopPriority.URGENT, StopPriority.HIGH})
TWO_PLACES = Decimal("0.01")


def _km(value: float) -> Decimal:
    return Decimal(repr(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class RouteSequencer:
    """
    Assigns stop order, leg distances, planned times and route totals.

    The first leg starts at the route's warehouse when it has coordinates.
    A leg touching a stop without coordinates counts as zero kilometres, and
    the next leg is measured from the last known point.
    """

    def sequence(
        self,
        route: DeliveryRoute,
        stops: list[RouteStop],
        origin: GeoPoint | None,
        total_weight: Decimal = Decimal("0"),
    ) -> DeliveryRoute:
        """
        Put the stops on the route in the given order.

        Args:
            route: Route being planned
            stops: Stops in visiting order
            origin: Warehouse coordinates, if known
            total_weight: Combined weight of the shipments on the route

        Returns:
            The same route with stops and totals filled in
        """
        previous = origin
        total_distance = Decimal("0")

        for position, stop in enumerate(stops, start=1):
            stop.stop_order = position
            if previous is not None and stop.location is not None:
                stop.distance_from_previous = _km(previous.distance_to(stop.location))
            else:
                stop.distance_from_previous = Decimal("0")
            total_distance += stop.distance_from_previous
            if stop.location is not None:
                previous = stop.location

            if route.planned_start_time is not None:
                offset = (position - 1) * (TRAVEL_MINUTES_PER_STOP + SERVICE_MINUTES_PER_STOP)
                arrival = route.planned_start_time + timedelta(minutes=offset)
                stop.planned_arrival_time = arrival
                stop.planned_departure_time = arrival + timedelta(minutes=SERVICE_MINUTES_PER_STOP)

        count = len(stops)
        route.stops = stops
        route.total_stops = count
        route.total_distance = total_distance
        route.estimated_duration = (
            count * (TRAVEL_HOURS_PER_STOP + SERVICE_HOURS_PER_STOP)
        ).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        route.total_weight = Decimal(total_weight).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        return route

    def optimize_order(self, stops: list[RouteStop], origin: GeoPoint | None) -> list[RouteStop]:
        """
        Order stops for a shorter run.

        Urgent and high priority stops keep their relative order at the front.
        The rest are visited nearest-first, starting from the last placed
        stop (or the warehouse). Stops without coordinates go last.

        Returns:
            New list of the same stops
        """
        ordered = sorted(stops, key=lambda stop: stop.stop_order)
        rushed = [stop for stop in ordered if stop.priority in RUSH_PRIORITIES]
        located = [
            stop
            for stop in ordered
            if stop.priority not in RUSH_PRIORITIES and stop.location is not None
        ]
        unlocated = [
            stop
            for stop in ordered
            if stop.priority not in RUSH_PRIORITIES and stop.location is None
        ]

        result = list(rushed)
        current = origin
        for stop in reversed(rushed):
            if stop.location is not None:
                current = stop.location
                break

        while located:
            if current is None:
                nearest = located[0]
            else:
                here = current
                nearest = min(
                    located,
                    key=lambda stop: here.distance_to(stop.location),  # type: ignore[arg-type]
                )
            located.remove(nearest)
            result.append(nearest)
            current = nearest.location

        return result + unlocated

    def optimize(self, route: DeliveryRoute, origin: GeoPoint | None) -> DeliveryRoute:
        """Reorder a planned route's stops and recompute its legs and timings."""
        if route.status != RouteStatus.PLANNED:
            raise BusinessRuleViolationError(
                "optimize_planned_route", "Only planned routes can be optimized"
            )
        return self.sequence(
            route, self.optimize_order(route.stops, origin), origin, route.total_weight
        )
