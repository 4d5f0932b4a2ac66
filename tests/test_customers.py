"""Tests for customer account endpoints."""

from datetime import UTC, datetime
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from cargodesk import models


@pytest.fixture
def customer_payload() -> dict[str, Any]:
    return {
        "company_name": "Upendo Exporters",
        "contact_person": "Upendo Mrema",
        "email": "Upendo@Exporters.co.tz",
        "phone": "+255722000000",
        "address_line_1": "Plot 9, Uhuru Street",
        "city": "Moshi",
        "country": "Tanzania",
        "credit_limit": "1500000",
        "payment_terms": "net_60",
    }


class TestCreateCustomer:
    """Test suite for POST /customers endpoint."""

    def test_create_customer_assigns_code(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_payload: dict[str, Any],
    ) -> None:
        response = client.post("/api/v1/customers", json=customer_payload, headers=staff_headers)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        year = datetime.now(UTC).year
        assert data["customer_code"] == f"CUS-{year}-0001"
        assert data["email"] == "upendo@exporters.co.tz"
        assert data["status"] == "active"
        assert data["payment_terms"] == "net_60"
        assert data["full_address"] == "Plot 9, Uhuru Street, Moshi, Tanzania"

    def test_codes_increase_within_the_year(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_payload: dict[str, Any],
    ) -> None:
        first = client.post("/api/v1/customers", json=customer_payload, headers=staff_headers)
        second = client.post(
            "/api/v1/customers",
            json={**customer_payload, "email": "second@exporters.co.tz"},
            headers=staff_headers,
        )

        year = datetime.now(UTC).year
        assert first.json()["customer_code"] == f"CUS-{year}-0001"
        assert second.json()["customer_code"] == f"CUS-{year}-0002"

    def test_duplicate_email(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_payload: dict[str, Any],
        test_customer: models.Customer,
    ) -> None:
        response = client.post(
            "/api/v1/customers",
            json={**customer_payload, "email": test_customer.email},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_negative_credit_limit(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/customers",
            json={**customer_payload, "credit_limit": "-1"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_customer_users_cannot_create(
        self,
        client: TestClient,
        customer_headers: dict[str, str],
        customer_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/customers", json=customer_payload, headers=customer_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestListCustomers:
    """Test suite for GET /customers endpoint."""

    def test_search_and_filter(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
        other_customer: models.Customer,
    ) -> None:
        response = client.get(
            "/api/v1/customers", params={"search": "kilima"}, headers=staff_headers
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["customer_code"] == "CUS-2026-0001"
        assert data["offset"] == 0
        assert data["limit"] == 20

    def test_pagination(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
        other_customer: models.Customer,
    ) -> None:
        response = client.get(
            "/api/v1/customers", params={"offset": 1, "limit": 1}, headers=staff_headers
        )

        data = response.json()
        assert data["total"] == 2
        assert len(data["items"]) == 1

    def test_status_filter(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        response = client.get(
            "/api/v1/customers", params={"status": "pending_approval"}, headers=staff_headers
        )

        assert response.json()["total"] == 0


class TestCustomerApproval:
    """Test suite for the registration approval workflow."""

    def test_approve_registered_customer(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        client.post(
            "/api/v1/users/register",
            json={
                "email": "new@shop.co.tz",
                "password": "password123",
                "contact_person": "New Shop",
                "phone": "+255733000000",
                "address_line_1": "Stand 4",
                "city": "Dodoma",
                "country": "Tanzania",
            },
        )
        pending = client.get(
            "/api/v1/customers", params={"status": "pending_approval"}, headers=staff_headers
        ).json()["items"][0]

        response = client.post(
            f"/api/v1/customers/{pending['id']}/approve", headers=staff_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "active"

    def test_cannot_approve_active_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        response = client.post(
            f"/api/v1/customers/{test_customer.id}/approve", headers=staff_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_reject_registered_customer(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        client.post(
            "/api/v1/users/register",
            json={
                "email": "late@shop.co.tz",
                "password": "password123",
                "contact_person": "Late Shop",
                "phone": "+255733000001",
                "address_line_1": "Stand 9",
                "city": "Mwanza",
                "country": "Tanzania",
            },
        )
        pending = client.get(
            "/api/v1/customers", params={"status": "pending_approval"}, headers=staff_headers
        ).json()["items"][0]

        response = client.post(f"/api/v1/customers/{pending['id']}/reject", headers=staff_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "suspended"


class TestCustomerDetail:
    """Test suite for single customer endpoints."""

    def test_customer_sees_own_account(
        self,
        client: TestClient,
        customer_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        response = client.get("/api/v1/customers/me", headers=customer_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == test_customer.id

    def test_update_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        response = client.put(
            f"/api/v1/customers/{test_customer.id}",
            json={"city": "Tanga", "status": "suspended"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["city"] == "Tanga"
        assert response.json()["status"] == "suspended"
        assert response.json()["contact_person"] == "Amani Juma"

    def test_delete_hides_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        response = client.delete(f"/api/v1/customers/{test_customer.id}", headers=staff_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        response = client.get(f"/api/v1/customers/{test_customer.id}", headers=staff_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_missing_customer(self, client: TestClient, staff_headers: dict[str, str]) -> None:
        response = client.get("/api/v1/customers/999", headers=staff_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
