"""Warehouse entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal
from enum import StrEnum

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import WarehouseId

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
CLOSED = "closed"
_HOURS_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)-([01]\d|2[0-3]):([0-5]\d)$")


class WarehouseStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


def _parse_hours(value: str) -> tuple[time, time]:
    match = _HOURS_PATTERN.match(value)
    if not match:
        raise ValidationError(
            "Operating hours must look like 'HH:MM-HH:MM' or 'closed'",
            field="operating_hours",
            value=value,
        )
    open_h, open_m, close_h, close_m = (int(part) for part in match.groups())
    return time(open_h, open_m), time(close_h, close_m)


@dataclass
class Warehouse(Entity[WarehouseId]):
    """
    A warehouse or depot that shipments leave from and arrive at.

    operating_hours maps lower-case weekday names to "HH:MM-HH:MM" or
    "closed". A warehouse without any hours configured is treated as
    always open.
    """

    id: WarehouseId
    code: str
    name: str
    address: str
    city: str
    country: str
    state_province: str | None = None
    postal_code: str | None = None
    location: GeoPoint | None = None
    capacity_cubic_meters: Decimal | None = None
    operating_hours: dict[str, str] = field(default_factory=dict)
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None
    status: WarehouseStatus = WarehouseStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        for field_name in ("code", "name", "address", "city", "country"):
            if not getattr(self, field_name, "").strip():
                raise ValidationError(
                    f"{field_name.capitalize()} cannot be empty", field=field_name
                )
        if self.capacity_cubic_meters is not None and self.capacity_cubic_meters < 0:
            raise ValidationError(
                "Capacity cannot be negative",
                field="capacity_cubic_meters",
                value=self.capacity_cubic_meters,
            )
        for day, hours in self.operating_hours.items():
            if day not in WEEKDAYS:
                raise ValidationError(f"Unknown weekday {day}", field="operating_hours", value=day)
            if hours != CLOSED:
                _parse_hours(hours)

    def is_operational(self, at: datetime) -> bool:
        """Whether the warehouse accepts work at the given moment."""
        if self.status != WarehouseStatus.ACTIVE:
            return False
        if not self.operating_hours:
            return True

        hours = self.operating_hours.get(WEEKDAYS[at.weekday()])
        if hours is None or hours == CLOSED:
            return False

        opens, closes = _parse_hours(hours)
        return opens <= at.time().replace(tzinfo=None) <= closes

    def distance_to(self, other: "Warehouse") -> float | None:
        """Kilometres between the two warehouses, or None if either is not located."""
        if self.location is None or other.location is None:
            return None
        return self.location.distance_to(other.location)

    def update_details(self, **changes: object) -> None:
        """
        Apply partial changes and re-validate.

        Raises:
            ValidationError: If a change leaves the warehouse invalid
        """
        for key, value in changes.items():
            if key in ("id", "created_at") or not hasattr(self, key):
                raise ValidationError(f"{key} cannot be changed", field=key)
            setattr(self, key, value)
        self.__post_init__()

    @classmethod
    def create(
        cls,
        code: str,
        name: str,
        address: str,
        city: str,
        country: str,
        **optional: object,
    ) -> "Warehouse":
        """Create a new warehouse (ID will be 0 until persisted)."""
        return cls(
            id=WarehouseId.generate(),
            code=code.strip().upper(),
            name=name.strip(),
            address=address.strip(),
            city=city.strip(),
            country=country.strip(),
            **optional,  # type: ignore[arg-type]
        )
