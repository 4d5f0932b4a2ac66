"""Tests for support ticket endpoints."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from cargodesk import models

OpenTicket = Callable[..., dict[str, Any]]


@pytest.fixture
def open_ticket(client: TestClient, customer_headers: dict[str, str]) -> OpenTicket:
    """Open a ticket as the customer user."""

    def _open(**overrides: Any) -> dict[str, Any]:
        payload = {
            "subject": "Parcel not delivered",
            "description": "Tracking says out for delivery since Monday.",
            "category": "shipping",
            **overrides,
        }
        response = client.post("/api/v1/support-tickets", json=payload, headers=customer_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _open


class TestCreateTicket:
    """Test suite for POST /support-tickets endpoint."""

    def test_customer_opens_ticket(
        self, open_ticket: OpenTicket, test_customer: models.Customer
    ) -> None:
        ticket = open_ticket(priority="high")

        assert ticket["ticket_number"].startswith("TKT-")
        assert ticket["status"] == "open"
        assert ticket["customer_id"] == test_customer.id
        assert ticket["is_overdue"] is False
        assert ticket["first_response_at"] is None

    def test_staff_opens_ticket_for_customer(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        staff_user: models.User,
        other_customer: models.Customer,
    ) -> None:
        response = client.post(
            "/api/v1/support-tickets",
            json={
                "customer_id": other_customer.id,
                "subject": "Invoice query",
                "description": "Customer called about VAT.",
                "source": "phone",
                "assigned_to": staff_user.id,
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["assigned_to"] == staff_user.id
        assert response.json()["source"] == "phone"

    def test_staff_must_name_customer(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/support-tickets",
            json={"subject": "Question", "description": "Hello"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_cannot_assign_to_customer_login(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_user: models.User,
        test_customer: models.Customer,
    ) -> None:
        response = client.post(
            "/api/v1/support-tickets",
            json={
                "customer_id": test_customer.id,
                "subject": "Question",
                "description": "Hello",
                "assigned_to": customer_user.id,
            },
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "assigned_to"


class TestTicketReplies:
    """Test suite for POST /support-tickets/{id}/replies endpoint."""

    def test_first_staff_reply_starts_work(
        self, open_ticket: OpenTicket, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        ticket = open_ticket()

        response = client.post(
            f"/api/v1/support-tickets/{ticket['id']}/replies",
            json={"message": "We are checking with the driver."},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["status"] == "in_progress"
        assert data["first_response_at"] is not None
        assert data["response_time_hours"] is not None
        assert data["replies"][0]["from_staff"] is True

    def test_internal_notes_hidden_from_customer(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}"
        client.post(
            f"{url}/replies",
            json={"message": "Driver lost the parcel", "is_internal": True},
            headers=staff_headers,
        )

        staff_view = client.get(url, headers=staff_headers).json()
        customer_view = client.get(url, headers=customer_headers).json()

        assert len(staff_view["replies"]) == 1
        assert customer_view["replies"] == []
        # an internal note is not a response
        assert staff_view["status"] == "open"
        assert staff_view["first_response_at"] is None

    def test_customer_cannot_post_internal_note(
        self, open_ticket: OpenTicket, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        ticket = open_ticket()

        response = client.post(
            f"/api/v1/support-tickets/{ticket['id']}/replies",
            json={"message": "secret", "is_internal": True},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_customer_reply_resumes_waiting_ticket(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}"
        client.post(f"{url}/status", json={"status": "waiting_customer"}, headers=staff_headers)

        response = client.post(
            f"{url}/replies", json={"message": "Here is the photo"}, headers=customer_headers
        )

        assert response.json()["status"] == "in_progress"

    def test_no_replies_on_closed_ticket(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}"
        client.post(f"{url}/close", headers=staff_headers)

        response = client.post(f"{url}/replies", json={"message": "Hi?"}, headers=customer_headers)

        assert response.status_code == status.HTTP_409_CONFLICT


class TestTicketLifecycle:
    """Test suite for resolving, closing and rating tickets."""

    def test_resolve_then_rate(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}"

        resolved = client.post(f"{url}/resolve", headers=staff_headers).json()
        rated = client.post(
            f"{url}/rating", json={"rating": 5, "feedback": "Fast"}, headers=customer_headers
        )

        assert resolved["status"] == "resolved"
        assert resolved["resolved_at"] is not None
        assert rated.status_code == status.HTTP_200_OK
        assert rated.json()["satisfaction_rating"] == 5

    def test_cannot_rate_open_ticket(
        self, open_ticket: OpenTicket, client: TestClient, customer_headers: dict[str, str]
    ) -> None:
        ticket = open_ticket()

        response = client.post(
            f"/api/v1/support-tickets/{ticket['id']}/rating",
            json={"rating": 4},
            headers=customer_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_staff_cannot_rate(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
    ) -> None:
        ticket = open_ticket()
        client.post(f"/api/v1/support-tickets/{ticket['id']}/resolve", headers=staff_headers)

        response = client.post(
            f"/api/v1/support-tickets/{ticket['id']}/rating",
            json={"rating": 4},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_close_stamps_resolution(
        self, open_ticket: OpenTicket, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        ticket = open_ticket()

        closed = client.post(
            f"/api/v1/support-tickets/{ticket['id']}/close", headers=staff_headers
        ).json()

        assert closed["status"] == "closed"
        assert closed["closed_at"] is not None
        assert closed["resolved_at"] is not None

    def test_closed_ticket_cannot_reopen(
        self, open_ticket: OpenTicket, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}"
        client.post(f"{url}/close", headers=staff_headers)

        response = client.post(f"{url}/status", json={"status": "open"}, headers=staff_headers)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_assign_and_unassign(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        staff_user: models.User,
    ) -> None:
        ticket = open_ticket()
        url = f"/api/v1/support-tickets/{ticket['id']}/assign"

        assigned = client.post(url, json={"assigned_to": staff_user.id}, headers=staff_headers)
        unassigned = client.post(url, json={"assigned_to": None}, headers=staff_headers)

        assert assigned.json()["assigned_to"] == staff_user.id
        assert unassigned.json()["assigned_to"] is None


class TestListTickets:
    """Test suite for GET /support-tickets endpoint."""

    def test_overdue_only(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        db_session: Session,
    ) -> None:
        late = open_ticket(priority="urgent")
        open_ticket(priority="low")
        row = db_session.get(models.SupportTicket, late["id"])
        assert row is not None
        row.created_at = datetime.now(UTC) - timedelta(hours=3)
        db_session.commit()

        response = client.get(
            "/api/v1/support-tickets", params={"overdue_only": True}, headers=staff_headers
        )

        items = response.json()["items"]
        assert [item["id"] for item in items] == [late["id"]]
        assert items[0]["is_overdue"] is True

    def test_customer_scope_and_filters(
        self,
        open_ticket: OpenTicket,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        own = open_ticket(category="billing")
        client.post(
            "/api/v1/support-tickets",
            json={"customer_id": other_customer.id, "subject": "Other", "description": "Other"},
            headers=staff_headers,
        )

        mine = client.get("/api/v1/support-tickets", headers=customer_headers).json()
        billing = client.get(
            "/api/v1/support-tickets", params={"category": "billing"}, headers=staff_headers
        ).json()

        assert [item["id"] for item in mine["items"]] == [own["id"]]
        assert [item["id"] for item in billing["items"]] == [own["id"]]

    def test_customer_cannot_open_foreign_ticket(
        self,
        client: TestClient,
        staff_headers: dict[str, str],
        customer_headers: dict[str, str],
        other_customer: models.Customer,
    ) -> None:
        foreign = client.post(
            "/api/v1/support-tickets",
            json={"customer_id": other_customer.id, "subject": "Other", "description": "Other"},
            headers=staff_headers,
        ).json()

        response = client.get(
            f"/api/v1/support-tickets/{foreign['id']}", headers=customer_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
