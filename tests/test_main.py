"""Tests for main API endpoints."""

import inspect

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from cargodesk.main import app

# Auth, account and settings endpoints are coroutines
ASYNC_PATH_PREFIXES = ("/api/v1/auth", "/api/v1/users", "/api/v1/settings")


def test_root_endpoint(client: TestClient) -> None:
    """Test root endpoint returns welcome message."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to cargodesk API"}


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_api_root_endpoint(client: TestClient) -> None:
    """Test API v1 root endpoint."""
    response = client.get("/api/v1/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "cargodesk API v1"
    assert data["version"] == "0.1.0"
    assert data["docs"] == "/api/v1/docs"


def test_public_settings(client: TestClient) -> None:
    """Settings are readable without logging in."""
    response = client.get("/api/v1/settings")
    assert response.status_code == 200
    data = response.json()
    assert data["feature_flags"] == {"customer_registrations": True}
    assert data["default_currency"] == "TZS"
    assert data["company_name"] == "Cargodesk Logistics"


def test_protected_endpoint_requires_token(client: TestClient) -> None:
    response = client.get("/api/v1/shipments")
    assert response.status_code == 401


def test_invalid_token_rejected(client: TestClient) -> None:
    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_database_handlers_run_in_threadpool() -> None:
    """Handlers that query through a blocking session must not be coroutines."""
    coroutines = [
        route.path
        for route in app.routes
        if isinstance(route, APIRoute)
        and route.path.startswith("/api/v1/")
        and route.path != "/api/v1/"
        and not route.path.startswith(ASYNC_PATH_PREFIXES)
        and inspect.iscoroutinefunction(route.endpoint)
    ]
    assert coroutines == []
