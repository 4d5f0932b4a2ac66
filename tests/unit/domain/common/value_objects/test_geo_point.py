"""Tests for GeoPoint value object."""

import pytest

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.geo_point import GeoPoint

DAR = GeoPoint(latitude=-6.7924, longitude=39.2083)
ARUSHA = GeoPoint(latitude=-3.3869, longitude=36.6830)


class TestGeoPoint:
    """Test suite for GeoPoint value object."""

    def test_distance_between_cities(self) -> None:
        assert DAR.distance_to(ARUSHA) == pytest.approx(471, abs=10)

    def test_distance_is_symmetric(self) -> None:
        assert DAR.distance_to(ARUSHA) == pytest.approx(ARUSHA.distance_to(DAR))

    def test_distance_to_self(self) -> None:
        assert DAR.distance_to(DAR) == 0

    @pytest.mark.parametrize(("latitude", "longitude"), [(91, 0), (-90.5, 0), (0, 180.1)])
    def test_out_of_range(self, latitude: float, longitude: float) -> None:
        with pytest.raises(ValidationError):
            GeoPoint(latitude=latitude, longitude=longitude)

    def test_from_optional(self) -> None:
        assert GeoPoint.from_optional(None, 39.2) is None
        assert GeoPoint.from_optional(-6.8, 39.2) == GeoPoint(latitude=-6.8, longitude=39.2)

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DAR.latitude = 0  # type: ignore[misc]
