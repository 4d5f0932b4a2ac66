"""Tests for driver endpoints."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

DRIVER = {
    "name": "Juma Hassan",
    "email": "Juma.Hassan@Cargodesk.co.tz",
    "phone": "+255711000001",
    "license_number": "tz-dl-40021",
    "license_expiry": "2030-06-30",
    "vehicle_type": "van",
    "vehicle_plate": "T 123 ABC",
    "vehicle_capacity": "1200",
}


@pytest.fixture
def driver(client: TestClient, staff_headers: dict[str, str]) -> dict[str, Any]:
    response = client.post("/api/v1/drivers", json=DRIVER, headers=staff_headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateDriver:
    """Test suite for POST /drivers endpoint."""

    def test_create_driver(self, driver: dict[str, Any]) -> None:
        assert driver["driver_code"] == f"DRV-{datetime.now(UTC).year}-0001"
        assert driver["email"] == "juma.hassan@cargodesk.co.tz"
        assert driver["license_number"] == "TZ-DL-40021"
        assert Decimal(driver["rating"]) == Decimal("5")
        assert driver["status"] == "active"
        assert driver["is_available"] is True
        assert driver["license_expired"] is False
        assert driver["total_deliveries"] == 0

    def test_codes_are_sequential(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/drivers",
            json={**DRIVER, "email": "second@cargodesk.co.tz", "license_number": "TZ-DL-40022"},
            headers=staff_headers,
        )

        assert response.json()["driver_code"] == f"DRV-{datetime.now(UTC).year}-0002"

    def test_duplicate_email(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/drivers",
            json={
                **DRIVER,
                "email": "juma.hassan@cargodesk.co.tz",
                "license_number": "TZ-DL-40023",
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_duplicate_license_number(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/drivers",
            json={**DRIVER, "email": "other@cargodesk.co.tz", "license_number": " TZ-dl-40021 "},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "TZ-DL-40021" in response.json()["detail"]

    def test_expired_license_is_flagged(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/drivers",
            json={**DRIVER, "license_expiry": "2020-01-31"},
            headers=staff_headers,
        )

        assert response.json()["license_expired"] is True

    def test_customer_forbidden(
        self, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        response = client.post("/api/v1/drivers", json=DRIVER, headers=customer_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestListDrivers:
    """Test suite for GET /drivers endpoint."""

    def test_search_and_availability(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        other = client.post(
            "/api/v1/drivers",
            json={
                **DRIVER,
                "name": "Rehema Ally",
                "email": "rehema@cargodesk.co.tz",
                "license_number": "TZ-DL-51007",
            },
            headers=staff_headers,
        ).json()
        client.post(
            f"/api/v1/drivers/{other['id']}/availability",
            json={"is_available": False},
            headers=staff_headers,
        )

        by_name = client.get(
            "/api/v1/drivers", params={"search": "rehema"}, headers=staff_headers
        ).json()
        available = client.get(
            "/api/v1/drivers", params={"available": True}, headers=staff_headers
        ).json()

        assert [item["id"] for item in by_name["items"]] == [other["id"]]
        assert [item["id"] for item in available["items"]] == [driver["id"]]


class TestDriverUpdates:
    """Test suite for driver updates, location and availability."""

    def test_update_location(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            f"/api/v1/drivers/{driver['id']}/location",
            json={"latitude": -6.8, "longitude": 39.28},
            headers=staff_headers,
        )

        data = response.json()
        assert data["latitude"] == pytest.approx(-6.8)
        assert data["longitude"] == pytest.approx(39.28)
        assert data["last_location_update"] is not None

    def test_location_out_of_range(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            f"/api/v1/drivers/{driver['id']}/location",
            json={"latitude": -96, "longitude": 39.28},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_suspension_takes_driver_off_duty(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        url = f"/api/v1/drivers/{driver['id']}"

        suspended = client.put(url, json={"status": "suspended"}, headers=staff_headers).json()
        available = client.post(
            f"{url}/availability", json={"is_available": True}, headers=staff_headers
        )

        assert suspended["is_available"] is False
        assert available.status_code == status.HTTP_409_CONFLICT

    def test_rating_bounds(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.put(
            f"/api/v1/drivers/{driver['id']}", json={"rating": "5.5"}, headers=staff_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_license_taken_by_another_driver(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        other = client.post(
            "/api/v1/drivers",
            json={**DRIVER, "email": "rehema@cargodesk.co.tz", "license_number": "TZ-DL-51007"},
            headers=staff_headers,
        ).json()

        response = client.put(
            f"/api/v1/drivers/{other['id']}",
            json={"license_number": "tz-dl-40021"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_driver(
        self, driver: dict[str, Any], client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        url = f"/api/v1/drivers/{driver['id']}"

        response = client.delete(url, headers=staff_headers)

        assert response.json()["success"] is True
        assert client.get(url, headers=staff_headers).status_code == 404
