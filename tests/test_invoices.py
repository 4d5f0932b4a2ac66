"""Tests for invoice endpoints."""

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from cargodesk import models

CreateInvoice = Callable[..., dict[str, Any]]


@pytest.fixture
def invoice_payload(test_customer: models.Customer) -> dict[str, Any]:
    return {
        "customer_id": test_customer.id,
        "issue_date": "2026-10-01",
        "items": [
            {"description": "Freight Dar - Arusha", "quantity": "2", "unit_price": "50000"},
            {
                "description": "Handling",
                "quantity": "1",
                "unit_price": "20000",
                "discount_percentage": "10",
            },
        ],
        "discount_amount": "1240",
    }


@pytest.fixture
def create_invoice(
    client: TestClient, staff_headers: dict[str, str], invoice_payload: dict[str, Any]
) -> CreateInvoice:
    def _create(**overrides: Any) -> dict[str, Any]:
        response = client.post(
            "/api/v1/invoices", json={**invoice_payload, **overrides}, headers=staff_headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestCreateInvoice:
    """Test suite for POST /invoices endpoint."""

    def test_totals_are_computed(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice()

        assert invoice["status"] == "draft"
        assert invoice["currency"] == "TZS"
        assert Decimal(invoice["tax_rate"]) == Decimal("18")
        # 100000 + 18000 (10% off 20000)
        assert Decimal(invoice["subtotal"]) == Decimal("118000.00")
        # 18% of 100000 + 18% of 18000
        assert Decimal(invoice["tax_amount"]) == Decimal("21240.00")
        assert Decimal(invoice["total_amount"]) == Decimal("138000.00")
        assert Decimal(invoice["balance_due"]) == Decimal("138000.00")
        assert Decimal(invoice["items"][1]["discount_amount"]) == Decimal("2000.00")

    def test_number_and_due_date(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice()

        assert invoice["invoice_number"] == "INV-2026-000001"
        # net_30 terms
        assert invoice["due_date"] == "2026-10-31"
        assert invoice["payment_terms"] == "net_30"

    def test_payment_terms_override_sets_due_date(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice(payment_terms="net_15")

        assert invoice["payment_terms"] == "net_15"
        assert invoice["due_date"] == "2026-10-16"

    def test_cash_on_delivery_is_due_on_issue(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice(payment_terms="cash_on_delivery")

        assert invoice["due_date"] == "2026-10-01"

    def test_unknown_payment_terms(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        invoice_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/invoices",
            json={**invoice_payload, "payment_terms": "net_45"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_addresses_are_copied(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice()

        assert invoice["billing_address"]["name"] == "Kilima Traders Ltd"
        assert invoice["company_address"]["name"] == "Cargodesk Logistics"

    def test_explicit_tax_rate_and_currency(self, create_invoice: CreateInvoice) -> None:
        invoice = create_invoice(
            currency="usd",
            tax_rate="0",
            discount_amount="0",
            items=[{"description": "Customs brokerage", "unit_price": "120.50"}],
        )

        assert invoice["currency"] == "USD"
        assert Decimal(invoice["tax_amount"]) == Decimal("0")
        assert Decimal(invoice["total_amount"]) == Decimal("120.50")

    def test_discount_larger_than_invoice(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        invoice_payload: dict[str, Any],
    ) -> None:
        response = client.post(
            "/api/v1/invoices",
            json={**invoice_payload, "discount_amount": "999999999"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "discount_amount"

    def test_shipment_of_other_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        invoice_payload: dict[str, Any],
        create_shipment: Callable[..., dict[str, Any]],
        other_customer: models.Customer,
    ) -> None:
        foreign = create_shipment(customer_id=other_customer.id)

        response = client.post(
            "/api/v1/invoices",
            json={**invoice_payload, "shipment_id": foreign["id"]},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_customer_is_notified(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        customer_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()

        items = client.get("/api/v1/notifications", headers=customer_headers).json()["items"]

        assert items[0]["type"] == "invoice_created"
        assert items[0]["data"]["invoice_number"] == invoice["invoice_number"]


class TestInvoiceLifecycle:
    """Test suite for sending, viewing, editing and cancelling invoices."""

    def test_send_then_customer_views(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()

        sent = client.post(f"/api/v1/invoices/{invoice['id']}/send", headers=staff_headers)
        assert sent.json()["status"] == "sent"
        assert sent.json()["sent_at"] is not None

        viewed = client.get(f"/api/v1/invoices/{invoice['id']}", headers=customer_headers)
        assert viewed.json()["status"] == "viewed"
        assert viewed.json()["view_count"] == 1

        staff_view = client.get(f"/api/v1/invoices/{invoice['id']}", headers=staff_headers)
        assert staff_view.json()["view_count"] == 1

    def test_replace_items_on_draft(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()

        response = client.put(
            f"/api/v1/invoices/{invoice['id']}/items",
            json={
                "items": [{"description": "Flat fee", "unit_price": "10000"}],
                "discount_amount": "0",
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()["items"]) == 1
        assert Decimal(response.json()["total_amount"]) == Decimal("11800.00")

    def test_items_locked_after_sending(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()
        client.post(f"/api/v1/invoices/{invoice['id']}/send", headers=staff_headers)

        response = client.put(
            f"/api/v1/invoices/{invoice['id']}/items",
            json={"items": [{"description": "Flat fee", "unit_price": "10000"}]},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_cancel_requires_reason(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()

        missing = client.post(
            f"/api/v1/invoices/{invoice['id']}/cancel", json={"reason": ""}, headers=staff_headers
        )
        cancelled = client.post(
            f"/api/v1/invoices/{invoice['id']}/cancel",
            json={"reason": "Duplicate"},
            headers=staff_headers,
        )

        assert missing.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert cancelled.json()["status"] == "cancelled"
        assert cancelled.json()["cancellation_reason"] == "Duplicate"

    def test_cannot_send_cancelled_invoice(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        invoice = create_invoice()
        client.post(
            f"/api/v1/invoices/{invoice['id']}/cancel",
            json={"reason": "Duplicate"},
            headers=staff_headers,
        )

        response = client.post(f"/api/v1/invoices/{invoice['id']}/send", headers=staff_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestOverdueInvoices:
    """Test suite for overdue detection."""

    def test_sweep_flags_sent_past_due(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        old = create_invoice(issue_date="2020-01-01")
        draft = create_invoice(issue_date="2020-01-01")
        client.post(f"/api/v1/invoices/{old['id']}/send", headers=staff_headers)

        response = client.post("/api/v1/invoices/mark-overdue", headers=staff_headers)

        assert response.json()["flagged"] == 1
        assert response.json()["invoice_numbers"] == [old["invoice_number"]]
        listed = client.get(
            "/api/v1/invoices", params={"status": "overdue"}, headers=staff_headers
        ).json()
        assert [item["id"] for item in listed["items"]] == [old["id"]]
        assert listed["items"][0]["days_overdue"] > 0
        assert draft["id"] not in [item["id"] for item in listed["items"]]

    def test_overdue_only_filter(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        old = create_invoice(issue_date="2020-01-01")
        current = create_invoice(issue_date=datetime.now(UTC).date().isoformat())
        for invoice in (old, current):
            client.post(f"/api/v1/invoices/{invoice['id']}/send", headers=staff_headers)

        response = client.get(
            "/api/v1/invoices", params={"overdue_only": True}, headers=staff_headers
        )

        assert [item["id"] for item in response.json()["items"]] == [old["id"]]


class TestListInvoices:
    """Test suite for GET /invoices endpoint."""

    def test_customers_only_see_their_own(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        own = create_invoice()
        create_invoice(customer_id=other_customer.id)

        response = client.get("/api/v1/invoices", headers=customer_headers)

        assert [item["id"] for item in response.json()["items"]] == [own["id"]]

    def test_search_by_customer_name(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        staff_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        own = create_invoice()
        create_invoice(customer_id=other_customer.id)

        response = client.get(
            "/api/v1/invoices", params={"search": "kilima"}, headers=staff_headers
        )

        assert [item["id"] for item in response.json()["items"]] == [own["id"]]

    def test_customer_cannot_open_foreign_invoice(
        self,
        create_invoice: CreateInvoice,
        client: TestClient,
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        foreign = create_invoice(customer_id=other_customer.id)

        response = client.get(f"/api/v1/invoices/{foreign['id']}", headers=customer_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
