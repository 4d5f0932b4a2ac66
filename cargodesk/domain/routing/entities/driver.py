"""Driver entity."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import DriverId

MAX_RATING = Decimal(5)


class DriverStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


@dataclass
class Driver(Entity[DriverId]):
    """A delivery driver and the vehicle they operate."""

    id: DriverId
    driver_code: str
    name: str
    email: str
    phone: str
    license_number: str
    license_expiry: date
    status: DriverStatus = DriverStatus.ACTIVE
    rating: Decimal = MAX_RATING
    total_deliveries: int = 0
    vehicle_type: str | None = None
    vehicle_plate: str | None = None
    vehicle_capacity: Decimal | None = None
    is_available: bool = True
    location: GeoPoint | None = None
    last_location_update: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Driver name cannot be empty", field="name")
        if self.rating < 0 or self.rating > MAX_RATING:
            raise ValidationError("Rating must be between 0 and 5", field="rating")
        if self.vehicle_capacity is not None and self.vehicle_capacity < 0:
            raise ValidationError("Vehicle capacity cannot be negative", field="vehicle_capacity")

    def license_expired(self, today: date | None = None) -> bool:
        return self.license_expiry < (today or datetime.now(UTC).date())

    def can_take_route(self) -> bool:
        return self.status == DriverStatus.ACTIVE and self.is_available

    def assign_route(self) -> None:
        """
        Reserve the driver for a route.

        Raises:
            BusinessRuleViolationError: If the driver is inactive or already busy
        """
        if not self.can_take_route():
            raise BusinessRuleViolationError(
                "driver_available", f"Driver {self.driver_code} is not available"
            )
        self.is_available = False

    def release(self, deliveries: int = 0) -> None:
        """Free the driver after a route, crediting finished deliveries."""
        self.is_available = self.status == DriverStatus.ACTIVE
        self.total_deliveries += deliveries

    def set_availability(self, available: bool) -> None:
        if available and self.status != DriverStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "driver_active", "Only active drivers can be made available"
            )
        self.is_available = available

    def update_location(self, location: GeoPoint, at: datetime | None = None) -> None:
        self.location = location
        self.last_location_update = at or datetime.now(UTC)

    def distance_to(self, point: GeoPoint) -> float | None:
        if self.location is None:
            return None
        return self.location.distance_to(point)

    def update_details(self, **changes: Any) -> None:  # noqa: ANN401
        for name, value in changes.items():
            setattr(self, name, value)
        if self.status != DriverStatus.ACTIVE:
            self.is_available = False
        self.__post_init__()

    @classmethod
    def create(
        cls,
        driver_code: str,
        name: str,
        email: str,
        phone: str,
        license_number: str,
        license_expiry: date,
        **optional: Any,  # noqa: ANN401
    ) -> "Driver":
        return cls(
            id=DriverId.generate(),
            driver_code=driver_code,
            name=name.strip(),
            email=email.strip().lower(),
            phone=phone,
            license_number=license_number.strip().upper(),
            license_expiry=license_expiry,
            **optional,
        )
