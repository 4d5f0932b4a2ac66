"""Tests for user profile and staff management endpoints."""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from cargodesk import models
from tests.conftest import TEST_PASSWORD


class TestGetMe:
    """Test suite for GET /users/me endpoint."""

    def test_get_me(
        self, client: TestClient, staff_user: models.User, staff_headers: dict[str, str]
    ) -> None:
        response = client.get("/api/v1/users/me", headers=staff_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == staff_user.id
        assert data["role"] == "staff"
        assert data["customer_id"] is None
        assert "hashed_password" not in data

    def test_deactivated_user_token_rejected(
        self,
        client: TestClient,
        db_session: Session,
        staff_user: models.User,
        staff_headers: dict[str, str],
    ) -> None:
        staff_user.is_active = False
        db_session.commit()

        response = client.get("/api/v1/users/me", headers=staff_headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestUpdateMe:
    """Test suite for POST /users/me endpoint."""

    def test_rename(self, client: TestClient, staff_headers: dict[str, str]) -> None:
        response = client.post("/api/v1/users/me", json={"name": "Samira"}, headers=staff_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Samira"

    def test_change_password(
        self, client: TestClient, staff_user: models.User, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/me",
            json={"current_password": TEST_PASSWORD, "new_password": "brand-new-password"},
            headers=staff_headers,
        )
        assert response.status_code == status.HTTP_200_OK

        login = client.post(
            "/api/v1/auth/login",
            data={"username": staff_user.email, "password": "brand-new-password"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_change_password_wrong_current(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users/me",
            json={"current_password": "not-it", "new_password": "brand-new-password"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Current password is incorrect"


class TestStaffManagement:
    """Test suite for admin-only /users endpoints."""

    def test_admin_creates_staff(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(
            "/api/v1/users",
            json={"email": "New.Staff@cargodesk.co.tz", "name": "New", "password": "password123"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["email"] == "new.staff@cargodesk.co.tz"
        assert response.json()["role"] == "staff"

    def test_admin_cannot_create_customer_login(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users",
            json={
                "email": "c@cargodesk.co.tz",
                "name": "C",
                "password": "password123",
                "role": "customer",
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["field"] == "role"

    def test_duplicate_email(
        self, client: TestClient, admin_headers: dict[str, str], staff_user: models.User
    ) -> None:
        response = client.post(
            "/api/v1/users",
            json={"email": staff_user.email, "name": "Dup", "password": "password123"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_staff_cannot_create_users(
        self, client: TestClient, staff_headers: dict[str, str]
    ) -> None:
        response = client.post(
            "/api/v1/users",
            json={"email": "x@cargodesk.co.tz", "name": "X", "password": "password123"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_users_by_role(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        staff_user: models.User,
        customer_user: models.User,
    ) -> None:
        response = client.get("/api/v1/users", params={"role": "staff"}, headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert [user["email"] for user in response.json()] == [staff_user.email]

    def test_deactivate_user(
        self, client: TestClient, admin_headers: dict[str, str], staff_user: models.User
    ) -> None:
        response = client.post(
            f"/api/v1/users/{staff_user.id}/deactivate", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is False

    def test_admin_cannot_deactivate_self(
        self, client: TestClient, admin_headers: dict[str, str], admin_user: models.User
    ) -> None:
        response = client.post(
            f"/api/v1/users/{admin_user.id}/deactivate", headers=admin_headers
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
