"""Pytest configuration and fixtures."""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-signing-access-tokens-0123456789"
os.environ["COOKIE_SECURE"] = "false"

from collections.abc import Callable, Generator  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cargodesk import models  # noqa: E402
from cargodesk.database import Base, get_db  # noqa: E402
from cargodesk.infrastructure.identity.services.password_service import (  # noqa: E402
    hash_password,
)
from cargodesk.infrastructure.identity.services.token_service import (  # noqa: E402
    create_access_token,
)
from cargodesk.main import app  # noqa: E402

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# One shared connection so every session sees the same in-memory database
test_engine = create_engine(
    TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

TEST_PASSWORD = "correct-horse-battery"  # noqa: S105


def auth_headers(user: models.User) -> dict[str, str]:
    """Bearer header for a user, as issued by the login endpoint."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _user(db_session: Session, email: str, role: str, **fields: Any) -> models.User:
    user = models.User(
        email=email,
        name=fields.pop("name", email.split("@")[0].title()),
        role=role,
        hashed_password=hash_password(TEST_PASSWORD),
        is_active=fields.pop("is_active", True),
        **fields,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session: Session) -> models.User:
    return _user(db_session, "admin@cargodesk.co.tz", "admin")


@pytest.fixture
def staff_user(db_session: Session) -> models.User:
    return _user(db_session, "staff@cargodesk.co.tz", "staff", name="Sam Staff")


@pytest.fixture
def test_customer(db_session: Session) -> models.Customer:
    customer = models.Customer(
        customer_code="CUS-2026-0001",
        company_name="Kilima Traders Ltd",
        contact_person="Amani Juma",
        email="amani@kilima.co.tz",
        phone="+255700000001",
        address_line_1="12 Samora Avenue",
        city="Dar es Salaam",
        country="Tanzania",
        credit_limit=Decimal("5000000"),
        payment_terms="net_30",
        status="active",
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def other_customer(db_session: Session) -> models.Customer:
    customer = models.Customer(
        customer_code="CUS-2026-0002",
        contact_person="Neema Mushi",
        email="neema@example.co.tz",
        phone="+255700000002",
        address_line_1="4 Sokoine Road",
        city="Arusha",
        country="Tanzania",
        payment_terms="net_15",
        status="active",
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def customer_user(db_session: Session, test_customer: models.Customer) -> models.User:
    return _user(
        db_session,
        "amani@kilima.co.tz",
        "customer",
        name="Amani Juma",
        customer_id=test_customer.id,
    )


@pytest.fixture
def admin_headers(admin_user: models.User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def staff_headers(staff_user: models.User) -> dict[str, str]:
    return auth_headers(staff_user)


@pytest.fixture
def customer_headers(customer_user: models.User) -> dict[str, str]:
    return auth_headers(customer_user)


@pytest.fixture
def origin_warehouse(db_session: Session) -> models.Warehouse:
    warehouse = models.Warehouse(
        code="DAR01",
        name="Dar es Salaam Hub",
        address="Nyerere Road, Plot 5",
        city="Dar es Salaam",
        country="Tanzania",
        latitude=-6.7924,
        longitude=39.2083,
        status="active",
    )
    db_session.add(warehouse)
    db_session.commit()
    db_session.refresh(warehouse)
    return warehouse


@pytest.fixture
def destination_warehouse(db_session: Session) -> models.Warehouse:
    warehouse = models.Warehouse(
        code="ARK01",
        name="Arusha Depot",
        address="Themi Industrial Area",
        city="Arusha",
        country="Tanzania",
        latitude=-3.3869,
        longitude=36.6830,
        status="active",
    )
    db_session.add(warehouse)
    db_session.commit()
    db_session.refresh(warehouse)
    return warehouse


@pytest.fixture
def shipment_payload(
    test_customer: models.Customer,
    origin_warehouse: models.Warehouse,
    destination_warehouse: models.Warehouse,
) -> dict[str, Any]:
    return {
        "customer_id": test_customer.id,
        "origin_warehouse_id": origin_warehouse.id,
        "destination_warehouse_id": destination_warehouse.id,
        "sender_name": "Kilima Traders Ltd",
        "sender_phone": "+255700000001",
        "sender_address": "12 Samora Avenue, Dar es Salaam",
        "recipient_name": "Baraka Mollel",
        "recipient_phone": "+255700000099",
        "recipient_address": "Clock Tower, Arusha",
        "weight_kg": "12.50",
        "length_cm": "50",
        "width_cm": "40",
        "height_cm": "30",
        "declared_value": "250000",
    }


@pytest.fixture
def create_shipment(
    client: TestClient, staff_headers: dict[str, str], shipment_payload: dict[str, Any]
) -> Callable[..., dict[str, Any]]:
    """Register a shipment through the API, overriding payload fields as needed."""

    def _create(**overrides: Any) -> dict[str, Any]:
        response = client.post(
            "/api/v1/shipments", json={**shipment_payload, **overrides}, headers=staff_headers
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
