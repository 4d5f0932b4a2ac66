"""Geographic coordinate value object."""

import math
from dataclasses import dataclass

from ..exceptions import ValidationError
from ..value_object import ValueObject

EARTH_RADIUS_KM = 6371


@dataclass(frozen=True)
class GeoPoint(ValueObject):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:  # noqa: PLR2004
            raise ValidationError(
                "Latitude must be between -90 and 90", field="latitude", value=self.latitude
            )
        if not -180 <= self.longitude <= 180:  # noqa: PLR2004
            raise ValidationError(
                "Longitude must be between -180 and 180", field="longitude", value=self.longitude
            )

    @classmethod
    def from_optional(cls, latitude: float | None, longitude: float | None) -> "GeoPoint | None":
        """Build a point only when both coordinates are present."""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))

    def distance_to(self, other: "GeoPoint") -> float:
        """Great-circle distance in kilometres (haversine)."""
        lat_delta = math.radians(other.latitude - self.latitude)
        lon_delta = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(lat_delta / 2) ** 2
            + math.cos(math.radians(self.latitude))
            * math.cos(math.radians(other.latitude))
            * math.sin(lon_delta / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c
