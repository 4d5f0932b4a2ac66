"""Tests for recording payments against invoices."""

from decimal import Decimal
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from cargodesk import models


@pytest.fixture
def sent_invoice(
    client: TestClient, staff_headers: dict[str, str], test_customer: models.Customer
) -> dict[str, Any]:
    """An issued invoice for 118000.00 (100000 plus 18% tax)."""
    response = client.post(
        "/api/v1/invoices",
        json={
            "customer_id": test_customer.id,
            "items": [{"description": "Freight", "unit_price": "100000"}],
        },
        headers=staff_headers,
    )
    invoice = response.json()
    client.post(f"/api/v1/invoices/{invoice['id']}/send", headers=staff_headers)
    return invoice


class TestRecordPayment:
    """Test suite for POST /invoices/{id}/payments endpoint."""

    def test_partial_payment(
        self, client: TestClient, staff_headers: dict[str, str], sent_invoice: dict[str, Any]
    ) -> None:
        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/payments",
            json={"amount": "18000", "method": "mobile_money", "reference_number": "MP-77"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["payment"]["payment_number"].startswith("PAY-")
        assert data["payment"]["currency"] == "TZS"
        assert Decimal(data["invoice"]["paid_amount"]) == Decimal("18000.00")
        assert Decimal(data["invoice"]["balance_due"]) == Decimal("100000.00")
        assert data["invoice"]["status"] == "sent"

    def test_full_payment_marks_paid(
        self, client: TestClient, staff_headers: dict[str, str], sent_invoice: dict[str, Any]
    ) -> None:
        url = f"/api/v1/invoices/{sent_invoice['id']}/payments"
        client.post(url, json={"amount": "18000", "method": "cash"}, headers=staff_headers)

        response = client.post(
            url, json={"amount": "100000", "method": "bank_transfer"}, headers=staff_headers
        )

        invoice = response.json()["invoice"]
        assert invoice["status"] == "paid"
        assert invoice["paid_date"] is not None
        assert Decimal(invoice["balance_due"]) == Decimal("0")

    def test_overpayment_rejected(
        self, client: TestClient, staff_headers: dict[str, str], sent_invoice: dict[str, Any]
    ) -> None:
        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/payments",
            json={"amount": "118000.01", "method": "cash"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_draft_cannot_be_paid(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        test_customer: models.Customer,
    ) -> None:
        draft = client.post(
            "/api/v1/invoices",
            json={
                "customer_id": test_customer.id,
                "items": [{"description": "Freight", "unit_price": "100"}],
            },
            headers=staff_headers,
        ).json()

        response = client.post(
            f"/api/v1/invoices/{draft['id']}/payments",
            json={"amount": "10", "method": "cash"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_zero_amount_rejected(
        self, client: TestClient, staff_headers: dict[str, str], sent_invoice: dict[str, Any]
    ) -> None:
        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/payments",
            json={"amount": "0", "method": "cash"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_customer_cannot_record_payment(
        self,
        client: TestClient,
        customer_headers: dict[str, str],
        sent_invoice: dict[str, Any],
    ) -> None:
        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/payments",
            json={"amount": "10", "method": "cash"},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestMarkPaid:
    """Test suite for POST /invoices/{id}/mark-paid endpoint."""

    def test_mark_paid_settles_balance(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
        sent_invoice: dict[str, Any],
    ) -> None:
        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/mark-paid",
            json={"method": "bank_transfer"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.json()["payment"]["amount"]) == Decimal("118000.00")
        assert response.json()["invoice"]["status"] == "paid"

        payments = client.get(
            f"/api/v1/invoices/{sent_invoice['id']}/payments", headers=customer_headers
        )
        assert len(payments.json()) == 1
        assert payments.json()[0]["notes"] == "Marked as paid"

        types = [
            item["type"]
            for item in client.get("/api/v1/notifications", headers=customer_headers).json()[
                "items"
            ]
        ]
        assert "payment_received" in types

    def test_paid_invoice_cannot_be_cancelled(
        self, client: TestClient, staff_headers: dict[str, str], sent_invoice: dict[str, Any]
    ) -> None:
        client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/mark-paid", json={}, headers=staff_headers
        )

        response = client.post(
            f"/api/v1/invoices/{sent_invoice['id']}/cancel",
            json={"reason": "Too late"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_foreign_customer_cannot_list_payments(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        foreign = client.post(
            "/api/v1/invoices",
            json={
                "customer_id": other_customer.id,
                "items": [{"description": "Freight", "unit_price": "100"}],
            },
            headers=staff_headers,
        ).json()

        response = client.get(
            f"/api/v1/invoices/{foreign['id']}/payments", headers=customer_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
