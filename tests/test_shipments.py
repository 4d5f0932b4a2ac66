"""Tests for shipment and public tracking endpoints."""

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from fastapi import status
from fastapi.testclient import TestClient

from cargodesk import models

CreateShipment = Callable[..., dict[str, Any]]


class TestCreateShipment:
    """Test suite for POST /shipments endpoint."""

    def test_staff_creates_pending_shipment(self, create_shipment: CreateShipment) -> None:
        shipment = create_shipment()

        year = datetime.now(UTC).year
        assert shipment["tracking_number"] == f"RT-{year}-000001"
        assert shipment["status"] == "pending"
        assert len(shipment["tracking_history"]) == 1
        assert shipment["tracking_history"][0]["location"] == "Dar es Salaam"
        assert shipment["tracking_history"][0]["notes"] == "Shipment created and pending pickup"

    def test_weights(self, create_shipment: CreateShipment) -> None:
        shipment = create_shipment()

        # 50 x 40 x 30 / 5000 = 12.00, actual weight 12.50 wins
        assert Decimal(shipment["volumetric_weight"]) == Decimal("12.00")
        assert Decimal(shipment["billable_weight"]) == Decimal("12.50")

    def test_tracking_numbers_are_sequential(self, create_shipment: CreateShipment) -> None:
        first = create_shipment()
        second = create_shipment()

        assert second["tracking_number"].endswith("000002")
        assert first["tracking_number"] != second["tracking_number"]

    def test_backfilled_history_for_shipment_in_transit(
        self, create_shipment: CreateShipment
    ) -> None:
        shipment = create_shipment(initial_status="in_transit")

        assert shipment["status"] == "in_transit"
        statuses = [event["status"] for event in shipment["tracking_history"]]
        assert statuses == ["in_transit", "picked_up", "pending"]
        times = [event["occurred_at"] for event in shipment["tracking_history"]]
        assert times == sorted(times, reverse=True)

    def test_backfilled_history_starts_at_creation(
        self, create_shipment: CreateShipment
    ) -> None:
        shipment = create_shipment(initial_status="delivered")

        created_at = datetime.fromisoformat(shipment["created_at"])
        times = [
            datetime.fromisoformat(event["occurred_at"])
            for event in shipment["tracking_history"]
        ]
        assert min(times) == created_at
        assert max(times) <= datetime.now(UTC)

    def test_creation_notifies_customer(
        self,
        create_shipment: CreateShipment,
        client: TestClient,
        customer_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()

        response = client.get("/api/v1/notifications", headers=customer_headers)

        items = response.json()["items"]
        assert len(items) == 1
        assert items[0]["type"] == "shipment_created"
        assert shipment["tracking_number"] in items[0]["title"]
        assert items[0]["data"]["tracking_url"] == f"/track/{shipment['tracking_number']}"
        assert items[0]["related_id"] == shipment["id"]

    def test_customer_always_ships_for_own_account(
        self,
        client: TestClient,
        customer_headers: dict[str, str],
        shipment_payload: dict[str, Any],
        test_customer: models.Customer,
        other_customer: models.Customer,
    ) -> None:
        response = client.post(
            "/api/v1/shipments",
            json={
                **shipment_payload,
                "customer_id": other_customer.id,
                "initial_status": "delivered",
            },
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["customer_id"] == test_customer.id
        assert response.json()["status"] == "pending"

    def test_staff_must_name_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        shipment_payload: dict[str, Any],
    ) -> None:
        payload = {key: value for key, value in shipment_payload.items() if key != "customer_id"}

        response = client.post("/api/v1/shipments", json=payload, headers=staff_headers)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "customer_id"

    def test_unknown_warehouse(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        shipment_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/shipments",
            json={**shipment_payload, "destination_warehouse_id": 999},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_zero_weight_rejected(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        shipment_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/shipments",
            json={**shipment_payload, "weight_kg": "0"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_items_are_kept(self, create_shipment: CreateShipment) -> None:
        shipment = create_shipment(
            items=[
                {"description": "Coffee beans", "quantity": 4, "weight_kg": "2.5", "value": "90000"}
            ]
        )

        assert shipment["items"][0]["description"] == "Coffee beans"
        assert shipment["items"][0]["quantity"] == 4


class TestListShipments:
    """Test suite for GET /shipments endpoint."""

    def test_customers_only_see_their_own(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        own = create_shipment()
        create_shipment(customer_id=other_customer.id)

        response = client.get(
            "/api/v1/shipments",
            params={"customer_id": other_customer.id},
            headers=customer_headers,
        )

        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["id"] == own["id"]

    def test_staff_filters(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        create_shipment()
        express = create_shipment(service_type="express", recipient_name="Rehema Kweka")

        by_service = client.get(
            "/api/v1/shipments", params={"service_type": "express"}, headers=staff_headers
        ).json()
        by_search = client.get(
            "/api/v1/shipments", params={"search": "rehema"}, headers=staff_headers
        ).json()
        by_status = client.get(
            "/api/v1/shipments", params={"status": "delivered"}, headers=staff_headers
        ).json()

        assert [item["id"] for item in by_service["items"]] == [express["id"]]
        assert [item["id"] for item in by_search["items"]] == [express["id"]]
        assert by_status["total"] == 0

    def test_customer_cannot_open_foreign_shipment(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        foreign = create_shipment(customer_id=other_customer.id)

        response = client.get(f"/api/v1/shipments/{foreign['id']}", headers=customer_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestShipmentStatus:
    """Test suite for POST /shipments/{id}/status endpoint."""

    def test_status_update_appends_history(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/status",
            json={"status": "picked_up", "location": "Dar es Salaam"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "picked_up"
        assert data["tracking_history"][0]["status"] == "picked_up"
        assert data["tracking_history"][0]["notes"] == "Package picked up from sender"

    def test_delivery_records_signature(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment(initial_status="out_for_delivery")

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/status",
            json={"status": "delivered", "location": "Arusha", "delivery_signature": "B. Mollel"},
            headers=staff_headers,
        )

        data = response.json()
        assert data["status"] == "delivered"
        assert data["delivery_signature"] == "B. Mollel"
        assert data["actual_delivery_date"] is not None

        types = {
            item["type"]
            for item in client.get("/api/v1/notifications", headers=customer_headers).json()[
                "items"
            ]
        }
        assert "shipment_delivered" in types

    def test_no_updates_after_delivery(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment(initial_status="delivered")

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/status",
            json={"status": "in_transit", "location": "Moshi"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_customers_cannot_update_status(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        customer_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/status",
            json={"status": "picked_up", "location": "Dar es Salaam"},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestCancelAndDelete:
    """Test suite for cancelling and deleting shipments."""

    def test_customer_cancels_pending_shipment(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        customer_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/cancel",
            json={"reason": "Order withdrawn"},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "cancelled"
        assert response.json()["tracking_history"][0]["notes"] == "Order withdrawn"

    def test_cannot_cancel_in_transit(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment(initial_status="in_transit")

        response = client.post(
            f"/api/v1/shipments/{shipment['id']}/cancel", json={}, headers=staff_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_pending_shipment(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment()

        response = client.delete(f"/api/v1/shipments/{shipment['id']}", headers=staff_headers)

        assert response.status_code == status.HTTP_200_OK
        response = client.get(f"/api/v1/shipments/{shipment['id']}", headers=staff_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_cannot_delete_picked_up_shipment(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment(initial_status="picked_up")

        response = client.delete(f"/api/v1/shipments/{shipment['id']}", headers=staff_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestUpdateShipment:
    """Test suite for PUT /shipments/{id} endpoint."""

    def test_update_details(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
        staff_user: models.User,
    ) -> None:
        shipment = create_shipment()

        response = client.put(
            f"/api/v1/shipments/{shipment['id']}",
            json={"recipient_phone": "+255700000100", "assigned_to": staff_user.id},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["recipient_phone"] == "+255700000100"
        assert response.json()["assigned_to"] == staff_user.id

    def test_delivered_shipment_is_read_only(
        self,
        client: TestClient,
        create_shipment: CreateShipment,
        staff_headers: dict[str, str],
    ) -> None:
        shipment = create_shipment(initial_status="delivered")

        response = client.put(
            f"/api/v1/shipments/{shipment['id']}",
            json={"recipient_name": "Someone Else"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestPublicTracking:
    """Test suite for GET /tracking/{tracking_number} endpoint."""

    def test_track_without_login(self, client: TestClient, create_shipment: CreateShipment) -> None:
        shipment = create_shipment(initial_status="picked_up")

        response = client.get(f"/api/v1/tracking/{shipment['tracking_number'].lower()}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "picked_up"
        assert data["recipient_name"] == "Baraka Mollel"
        assert [event["status"] for event in data["tracking_history"]] == ["picked_up", "pending"]
        assert "sender_phone" not in data
        assert "declared_value" not in data

    def test_unknown_tracking_number(self, client: TestClient) -> None:
        response = client.get("/api/v1/tracking/RT-2026-999999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
