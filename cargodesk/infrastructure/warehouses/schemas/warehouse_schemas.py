from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from cargodesk.domain.warehouses.entities.warehouse import Warehouse, WarehouseStatus


class WarehouseCreateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=20, description="Unique warehouse code")
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1, max_length=100)
    state_province: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    capacity_cubic_meters: Decimal | None = Field(None, ge=0)
    operating_hours: dict[str, str] = Field(
        default_factory=dict,
        description='Weekday to "HH:MM-HH:MM" or "closed", e.g. {"monday": "08:00-17:00"}',
    )
    contact_person: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    status: WarehouseStatus = WarehouseStatus.ACTIVE


class WarehouseUpdateRequest(BaseModel):
    """Partial update. Latitude and longitude are replaced together."""

    code: str | None = Field(None, min_length=1, max_length=20)
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    city: str | None = Field(None, min_length=1, max_length=100)
    state_province: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    capacity_cubic_meters: Decimal | None = Field(None, ge=0)
    operating_hours: dict[str, str] | None = None
    contact_person: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    status: WarehouseStatus | None = None


class WarehouseResponse(BaseModel):
    id: int
    code: str
    name: str
    address: str
    city: str
    state_province: str | None
    postal_code: str | None
    country: str
    latitude: float | None
    longitude: float | None
    capacity_cubic_meters: Decimal | None
    operating_hours: dict[str, str]
    contact_person: str | None
    phone: str | None
    email: str | None
    status: WarehouseStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, warehouse: Warehouse) -> "WarehouseResponse":
        location = warehouse.location
        return cls(
            id=warehouse.id.value,
            code=warehouse.code,
            name=warehouse.name,
            address=warehouse.address,
            city=warehouse.city,
            state_province=warehouse.state_province,
            postal_code=warehouse.postal_code,
            country=warehouse.country,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
            capacity_cubic_meters=warehouse.capacity_cubic_meters,
            operating_hours=warehouse.operating_hours,
            contact_person=warehouse.contact_person,
            phone=warehouse.phone,
            email=warehouse.email,
            status=warehouse.status,
            created_at=warehouse.created_at,
            updated_at=warehouse.updated_at,
        )


class WarehouseStatusResponse(BaseModel):
    warehouse_id: int
    at: datetime
    is_operational: bool


class WarehouseDistanceResponse(BaseModel):
    from_warehouse_id: int
    to_warehouse_id: int
    distance_km: float | None = Field(None, description="Null when either has no location")
