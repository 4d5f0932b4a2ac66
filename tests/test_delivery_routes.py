"""Tests for delivery route endpoints."""

from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from cargodesk import models

PlanRoute = Callable[..., dict[str, Any]]

START = "2026-10-20T08:00:00Z"


@pytest.fixture
def driver(client: TestClient, staff_headers: dict[str, str]) -> dict[str, Any]:
    response = client.post(
        "/api/v1/drivers",
        json={
            "name": "Juma Hassan",
            "email": "juma@cargodesk.co.tz",
            "phone": "+255711000001",
            "license_number": "TZ-DL-40021",
            "license_expiry": "2030-06-30",
        },
        headers=staff_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def plan_route(
    client: TestClient,
    staff_headers: dict[str, str],
    driver: dict[str, Any],
    origin_warehouse: models.Warehouse,
) -> PlanRoute:
    """Plan a route out of the Dar es Salaam hub for the test driver."""

    def _plan(stops: list[dict[str, Any]], **overrides: Any) -> dict[str, Any]:
        payload = {
            "driver_id": driver["id"],
            "warehouse_id": origin_warehouse.id,
            "delivery_date": "2026-10-20",
            "planned_start_time": START,
            "stops": stops,
            **overrides,
        }
        response = client.post("/api/v1/routes", json=payload, headers=staff_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _plan


def _driver(client: TestClient, headers: dict[str, str], driver_id: int) -> dict[str, Any]:
    return client.get(f"/api/v1/drivers/{driver_id}", headers=headers).json()


class TestCreateRoute:
    """Test suite for POST /routes endpoint."""

    def test_plan_route(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        first = create_shipment()
        second = create_shipment()

        route = plan_route(
            [{"shipment_id": first["id"]}, {"shipment_id": second["id"], "is_fragile": True}]
        )

        assert route["route_number"] == "RTE-20261020-001"
        assert route["status"] == "planned"
        assert route["total_stops"] == 2
        assert [stop["stop_order"] for stop in route["stops"]] == [1, 2]
        assert [stop["shipment_id"] for stop in route["stops"]] == [first["id"], second["id"]]
        assert route["stops"][0]["customer_name"] == "Baraka Mollel"
        assert route["stops"][1]["is_fragile"] is True
        # both deliveries go to the Arusha depot
        assert 440 < float(route["total_distance"]) < 500
        assert Decimal(route["stops"][1]["distance_from_previous"]) == Decimal("0")
        assert Decimal(route["estimated_duration"]) == Decimal("1.66")
        assert Decimal(route["total_weight"]) == Decimal("25")
        assert route["progress_percentage"] == 0.0
        assert _driver(client, staff_headers, driver["id"])["is_available"] is False

    def test_stops_are_timed_from_start(
        self, plan_route: PlanRoute, create_shipment: Callable[..., dict[str, Any]]
    ) -> None:
        stops = [{"shipment_id": create_shipment()["id"]} for _ in range(2)]

        route = plan_route(stops)

        arrivals = [
            datetime.fromisoformat(stop["planned_arrival_time"]) for stop in route["stops"]
        ]
        assert arrivals[0] == datetime.fromisoformat(START)
        assert arrivals[1] - arrivals[0] == timedelta(minutes=50)

    def test_busy_driver_conflict(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
        origin_warehouse: models.Warehouse,
    ) -> None:
        plan_route([{"shipment_id": create_shipment()["id"]}])

        response = client.post(
            "/api/v1/routes",
            json={
                "driver_id": driver["id"],
                "warehouse_id": origin_warehouse.id,
                "delivery_date": "2026-10-20",
                "stops": [{"shipment_id": create_shipment()["id"]}],
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_unknown_shipment(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
        origin_warehouse: models.Warehouse,
    ) -> None:
        response = client.post(
            "/api/v1/routes",
            json={
                "driver_id": driver["id"],
                "warehouse_id": origin_warehouse.id,
                "delivery_date": "2026-10-20",
                "stops": [{"shipment_id": 9999}],
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_end_before_start(
        self,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
        origin_warehouse: models.Warehouse,
    ) -> None:
        response = client.post(
            "/api/v1/routes",
            json={
                "driver_id": driver["id"],
                "warehouse_id": origin_warehouse.id,
                "delivery_date": "2026-10-20",
                "planned_start_time": START,
                "planned_end_time": "2026-10-20T07:00:00Z",
                "stops": [{"shipment_id": create_shipment()["id"]}],
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "planned_end_time"

    def test_customer_forbidden(self, client: TestClient, customer_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/routes", headers=customer_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestRunRoute:
    """Test suite for starting a route and working its stops."""

    def test_full_run(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        delivered = create_shipment()
        missed = create_shipment()
        route = plan_route([{"shipment_id": delivered["id"]}, {"shipment_id": missed["id"]}])
        url = f"/api/v1/routes/{route['id']}"
        first, second = (stop["id"] for stop in route["stops"])

        started = client.post(f"{url}/start", headers=staff_headers).json()
        assert started["status"] == "in_progress"
        assert started["stops"][0]["status"] == "in_transit"
        assert started["current_stop_id"] == first

        client.post(f"{url}/stops/{first}/arrive", headers=staff_headers)
        after_first = client.post(
            f"{url}/stops/{first}/complete",
            json={"signature": "B. Mollel", "notes": "Left at reception"},
            headers=staff_headers,
        ).json()
        assert after_first["completed_stops"] == 1
        assert after_first["progress_percentage"] == 50.0
        assert after_first["stops"][1]["status"] == "in_transit"

        finished = client.post(
            f"{url}/stops/{second}/fail",
            json={"reason": "Recipient not home"},
            headers=staff_headers,
        ).json()
        assert finished["status"] == "completed"
        assert finished["actual_end_time"] is not None
        assert finished["stops"][1]["failure_reason"] == "Recipient not home"

        shipment = client.get(f"/api/v1/shipments/{delivered['id']}", headers=staff_headers)
        assert shipment.json()["status"] == "delivered"
        assert shipment.json()["delivery_signature"] == "B. Mollel"
        exception = client.get(f"/api/v1/shipments/{missed['id']}", headers=staff_headers)
        assert exception.json()["status"] == "exception"

        released = _driver(client, staff_headers, driver["id"])
        assert released["is_available"] is True
        assert released["total_deliveries"] == 1

    def test_pickup_stop_picks_up_shipment(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()
        route = plan_route([{"shipment_id": shipment["id"], "type": "pickup"}])
        url = f"/api/v1/routes/{route['id']}"
        client.post(f"{url}/start", headers=staff_headers)

        client.post(
            f"{url}/stops/{route['stops'][0]['id']}/complete", json={}, headers=staff_headers
        )

        updated = client.get(f"/api/v1/shipments/{shipment['id']}", headers=staff_headers)
        assert updated.json()["status"] == "picked_up"
        # pickups start at the hub itself
        assert Decimal(route["total_distance"]) == Decimal("0")

    def test_driver_suspended_mid_route_stays_unavailable(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        url = f"/api/v1/routes/{route['id']}"
        client.post(f"{url}/start", headers=staff_headers)
        suspended = client.put(
            f"/api/v1/drivers/{driver['id']}", json={"status": "suspended"}, headers=staff_headers
        )
        assert suspended.status_code == status.HTTP_200_OK

        finished = client.post(
            f"{url}/stops/{route['stops'][0]['id']}/complete", json={}, headers=staff_headers
        ).json()

        assert finished["status"] == "completed"
        after = _driver(client, staff_headers, driver["id"])
        assert after["status"] == "suspended"
        assert after["is_available"] is False
        assert after["total_deliveries"] == 1

    def test_stops_need_route_in_progress(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])

        response = client.post(
            f"/api/v1/routes/{route['id']}/stops/{route['stops'][0]['id']}/complete",
            json={},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_stop_from_another_route(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        client.post(f"/api/v1/routes/{route['id']}/start", headers=staff_headers)

        response = client.post(
            f"/api/v1/routes/{route['id']}/stops/9999/arrive", headers=staff_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT


class TestOptimizeRoute:
    """Test suite for POST /routes/{id}/optimize endpoint."""

    def test_nearest_stop_first(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        far = create_shipment()
        near = create_shipment()
        route = plan_route(
            [{"shipment_id": far["id"]}, {"shipment_id": near["id"], "type": "pickup"}]
        )

        optimized = client.post(
            f"/api/v1/routes/{route['id']}/optimize", headers=staff_headers
        ).json()

        assert [stop["shipment_id"] for stop in optimized["stops"]] == [near["id"], far["id"]]
        assert [stop["stop_order"] for stop in optimized["stops"]] == [1, 2]
        assert Decimal(optimized["total_distance"]) < Decimal(route["total_distance"])

    def test_rush_stops_stay_in_front(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        urgent = create_shipment()
        near = create_shipment()
        route = plan_route(
            [
                {"shipment_id": urgent["id"], "priority": "urgent"},
                {"shipment_id": near["id"], "type": "pickup"},
            ]
        )

        optimized = client.post(
            f"/api/v1/routes/{route['id']}/optimize", headers=staff_headers
        ).json()

        assert [stop["shipment_id"] for stop in optimized["stops"]] == [urgent["id"], near["id"]]

    def test_only_planned_routes(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        client.post(f"/api/v1/routes/{route['id']}/start", headers=staff_headers)

        response = client.post(f"/api/v1/routes/{route['id']}/optimize", headers=staff_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestCancelAndDeleteRoute:
    """Test suite for cancelling and deleting routes."""

    def test_cancel_releases_driver(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])

        cancelled = client.post(f"/api/v1/routes/{route['id']}/cancel", headers=staff_headers)

        assert cancelled.json()["status"] == "cancelled"
        assert _driver(client, staff_headers, driver["id"])["is_available"] is True

    def test_delete_planned_route(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        url = f"/api/v1/routes/{route['id']}"

        response = client.delete(url, headers=staff_headers)

        assert response.json()["success"] is True
        assert client.get(url, headers=staff_headers).status_code == 404
        assert _driver(client, staff_headers, driver["id"])["is_available"] is True

    def test_cannot_delete_started_route(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        url = f"/api/v1/routes/{route['id']}"
        client.post(f"{url}/start", headers=staff_headers)

        delete = client.delete(url, headers=staff_headers)
        cancel = client.post(f"{url}/cancel", headers=staff_headers)

        assert delete.status_code == status.HTTP_409_CONFLICT
        assert cancel.status_code == status.HTTP_409_CONFLICT

    def test_driver_with_routes_cannot_be_deleted(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])
        client.post(f"/api/v1/routes/{route['id']}/cancel", headers=staff_headers)

        response = client.delete(f"/api/v1/drivers/{driver['id']}", headers=staff_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestListRoutes:
    """Test suite for GET /routes endpoint."""

    def test_filters(
        self,
        plan_route: PlanRoute,
        create_shipment: Callable[..., dict[str, Any]],
        client: TestClient,
        staff_headers: dict[str, str],
        driver: dict[str, Any],
    ) -> None:
        route = plan_route([{"shipment_id": create_shipment()["id"]}])

        by_date = client.get(
            "/api/v1/routes", params={"delivery_date": "2026-10-20"}, headers=staff_headers
        ).json()
        other_day = client.get(
            "/api/v1/routes", params={"delivery_date": "2026-10-21"}, headers=staff_headers
        ).json()
        by_status = client.get(
            "/api/v1/routes",
            params={"status": "planned", "driver_id": driver["id"]},
            headers=staff_headers,
        ).json()

        assert [item["id"] for item in by_date["items"]] == [route["id"]]
        assert other_day["total"] == 0
        assert by_status["total"] == 1
