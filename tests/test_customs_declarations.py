"""Tests for customs declaration endpoints."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

CreateDeclaration = Callable[..., dict[str, Any]]


@pytest.fixture
def declaration_payload(create_shipment: Callable[..., dict[str, Any]]) -> dict[str, Any]:
    shipment = create_shipment(service_type="international")
    return {
        "shipment_id": shipment["id"],
        "origin_country": "tza",
        "destination_country": "KEN",
        "description_of_goods": "Roasted coffee",
        "currency": "USD",
        "exporter_details": {"name": "Kilima Traders Ltd"},
        "importer_details": {"name": "Nairobi Roasters"},
        "items": [
            {
                "description": "Coffee, 1kg bags",
                "hs_code": "0901.21",
                "country_of_origin": "TZA",
                "quantity": 10,
                "unit_weight": "1.0",
                "unit_value": "300",
                "estimated_duty_rate": "25",
                "estimated_tax_rate": "18",
            }
        ],
    }


@pytest.fixture
def create_declaration(
    client: TestClient, staff_headers: dict[str, str], declaration_payload: dict[str, Any]
) -> CreateDeclaration:
    def _create(**overrides: Any) -> dict[str, Any]:
        response = client.post(
            "/api/v1/customs-declarations",
            json={**declaration_payload, **overrides},
            headers=staff_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestCreateDeclaration:
    """Test suite for POST /customs-declarations endpoint."""

    def test_values_and_estimates(self, create_declaration: CreateDeclaration) -> None:
        declaration = create_declaration()

        assert declaration["status"] == "draft"
        assert declaration["declaration_number"].startswith("CD-")
        assert declaration["origin_country"] == "TZA"
        assert Decimal(declaration["total_value"]) == Decimal("3000.00")
        assert Decimal(declaration["estimated_duties"]) == Decimal("750.00")
        assert Decimal(declaration["estimated_taxes"]) == Decimal("540.00")
        assert declaration["is_complete"] is True

    def test_required_documents(self, create_declaration: CreateDeclaration) -> None:
        declaration = create_declaration(contains_dangerous_goods=True)

        assert declaration["required_documents"] == [
            "commercial_invoice",
            "packing_list",
            "certificate_of_origin",
            "dangerous_goods_declaration",
            "export_license",
        ]

    def test_small_gift_needs_basic_documents(
        self, create_declaration: CreateDeclaration
    ) -> None:
        declaration = create_declaration(
            shipment_type="gift",
            items=[
                {
                    "description": "Kitenge fabric",
                    "country_of_origin": "TZA",
                    "quantity": 2,
                    "unit_weight": "0.5",
                    "unit_value": "40",
                }
            ],
        )

        assert declaration["required_documents"] == ["commercial_invoice", "packing_list"]

    def test_default_currency(self, create_declaration: CreateDeclaration) -> None:
        declaration = create_declaration(currency=None)

        assert declaration["currency"] == "TZS"

    def test_bad_country_code(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        declaration_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/customs-declarations",
            json={**declaration_payload, "destination_country": "K3N"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "destination_country"

    def test_staff_only(
        self,
        client: TestClient,
        customer_headers: dict[str, str],
        declaration_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/customs-declarations", json=declaration_payload, headers=customer_headers
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestDeclarationWorkflow:
    """Test suite for the declaration status flow."""

    def test_full_flow_to_cleared(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration()
        base = f"/api/v1/customs-declarations/{declaration['id']}"

        submitted = client.post(f"{base}/submit", headers=staff_headers).json()
        processing = client.post(f"{base}/processing", headers=staff_headers).json()
        approved = client.post(
            f"{base}/approve", json={"customs_response": "Duty assessed"}, headers=staff_headers
        ).json()
        cleared = client.post(
            f"{base}/clear", json={"customs_reference": "KRA-55"}, headers=staff_headers
        ).json()

        assert submitted["status"] == "submitted"
        assert submitted["submitted_at"] is not None
        assert processing["status"] == "processing"
        assert approved["status"] == "approved"
        assert approved["customs_response"] == "Duty assessed"
        assert cleared["status"] == "cleared"
        assert cleared["customs_reference"] == "KRA-55"

    def test_incomplete_declaration_cannot_be_submitted(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration(items=[], importer_details={})

        response = client.post(
            f"/api/v1/customs-declarations/{declaration['id']}/submit", headers=staff_headers
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "importer_details" in response.json()["detail"]
        assert "items" in response.json()["detail"]

    def test_rejected_declaration_can_be_fixed_and_resubmitted(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration()
        base = f"/api/v1/customs-declarations/{declaration['id']}"
        client.post(f"{base}/submit", headers=staff_headers)

        rejected = client.post(
            f"{base}/reject", json={"reason": "Missing HS code detail"}, headers=staff_headers
        ).json()
        assert rejected["status"] == "rejected"
        assert rejected["rejection_reason"] == "Missing HS code detail"

        updated = client.put(base, json={"incoterms": "FOB"}, headers=staff_headers)
        assert updated.status_code == status.HTTP_200_OK

        resubmitted = client.post(f"{base}/submit", headers=staff_headers).json()
        assert resubmitted["status"] == "submitted"
        assert resubmitted["rejection_reason"] is None

    def test_submitted_declaration_is_locked(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration()
        base = f"/api/v1/customs-declarations/{declaration['id']}"
        client.post(f"{base}/submit", headers=staff_headers)

        edit = client.put(base, json={"incoterms": "CIF"}, headers=staff_headers)
        delete = client.delete(base, headers=staff_headers)
        clear = client.post(f"{base}/clear", json={}, headers=staff_headers)

        assert edit.status_code == status.HTTP_409_CONFLICT
        assert delete.status_code == status.HTTP_409_CONFLICT
        assert clear.status_code == status.HTTP_409_CONFLICT

    def test_update_items_recomputes_charges(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration()

        response = client.put(
            f"/api/v1/customs-declarations/{declaration['id']}",
            json={
                "items": [
                    {
                        "description": "Tea",
                        "country_of_origin": "TZA",
                        "quantity": 1,
                        "unit_weight": "1",
                        "unit_value": "200",
                        "estimated_duty_rate": "10",
                    }
                ]
            },
            headers=staff_headers,
        )

        data = response.json()
        assert Decimal(data["total_value"]) == Decimal("200.00")
        assert Decimal(data["estimated_duties"]) == Decimal("20.00")
        assert Decimal(data["estimated_taxes"]) == Decimal("0.00")

        charges = client.get(
            f"/api/v1/customs-declarations/{declaration['id']}/estimated-charges",
            headers=staff_headers,
        ).json()
        assert Decimal(charges["total"]) == Decimal("20.00")
        assert charges["currency"] == "USD"

    def test_delete_draft(
        self,
        create_declaration: CreateDeclaration,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        declaration = create_declaration()
        base = f"/api/v1/customs-declarations/{declaration['id']}"

        assert client.delete(base, headers=staff_headers).status_code == status.HTTP_200_OK
        assert client.get(base, headers=staff_headers).status_code == status.HTTP_404_NOT_FOUND
