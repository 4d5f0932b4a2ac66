from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from cargodesk.domain.routing.entities.driver import Driver, DriverStatus


class DriverCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)
    license_number: str = Field(..., min_length=1, max_length=50)
    license_expiry: date
    vehicle_type: str | None = Field(None, max_length=50)
    vehicle_plate: str | None = Field(None, max_length=20)
    vehicle_capacity: Decimal | None = Field(None, ge=0, description="Kilograms")


class DriverUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=1, max_length=30)
    license_number: str | None = Field(None, min_length=1, max_length=50)
    license_expiry: date | None = None
    status: DriverStatus | None = None
    rating: Decimal | None = Field(None, ge=0, le=5)
    vehicle_type: str | None = Field(None, max_length=50)
    vehicle_plate: str | None = Field(None, max_length=20)
    vehicle_capacity: Decimal | None = Field(None, ge=0)


class DriverLocationRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class DriverAvailabilityRequest(BaseModel):
    is_available: bool


class DriverResponse(BaseModel):
    id: int
    driver_code: str
    name: str
    email: str
    phone: str
    license_number: str
    license_expiry: date
    license_expired: bool
    status: DriverStatus
    rating: Decimal
    total_deliveries: int
    vehicle_type: str | None
    vehicle_plate: str | None
    vehicle_capacity: Decimal | None
    is_available: bool
    latitude: float | None
    longitude: float | None
    last_location_update: datetime | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, driver: Driver) -> "DriverResponse":
        return cls(
            id=driver.id.value,
            driver_code=driver.driver_code,
            name=driver.name,
            email=driver.email,
            phone=driver.phone,
            license_number=driver.license_number,
            license_expiry=driver.license_expiry,
            license_expired=driver.license_expired(),
            status=driver.status,
            rating=driver.rating,
            total_deliveries=driver.total_deliveries,
            vehicle_type=driver.vehicle_type,
            vehicle_plate=driver.vehicle_plate,
            vehicle_capacity=driver.vehicle_capacity,
            is_available=driver.is_available,
            latitude=driver.location.latitude if driver.location else None,
            longitude=driver.location.longitude if driver.location else None,
            last_location_update=driver.last_location_update,
            created_at=driver.created_at,
            updated_at=driver.updated_at,
        )
