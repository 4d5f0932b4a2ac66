"""Tests for the Driver entity."""

from datetime import date

import pytest

from cargodesk.domain.common.exceptions import BusinessRuleViolationError
from cargodesk.domain.common.value_objects.ids import DriverId
from cargodesk.domain.routing.entities.driver import Driver, DriverStatus


def _driver() -> Driver:
    driver = Driver.create(
        driver_code="DRV-2026-0001",
        name="Juma Hassan",
        email="juma@cargodesk.co.tz",
        phone="+255700000010",
        license_number="tz-dl-40021",
        license_expiry=date(2030, 6, 30),
    )
    driver.id = DriverId(1)
    return driver


class TestDriverRouteAssignment:
    """Test suite for reserving and releasing drivers."""

    def test_assign_then_release(self) -> None:
        driver = _driver()

        driver.assign_route()
        assert driver.is_available is False

        driver.release(deliveries=3)
        assert driver.is_available is True
        assert driver.total_deliveries == 3

    def test_busy_driver_cannot_take_second_route(self) -> None:
        driver = _driver()
        driver.assign_route()

        with pytest.raises(BusinessRuleViolationError):
            driver.assign_route()

    @pytest.mark.parametrize("status", [DriverStatus.SUSPENDED, DriverStatus.INACTIVE])
    def test_release_keeps_inactive_driver_unavailable(self, status: DriverStatus) -> None:
        driver = _driver()
        driver.assign_route()
        driver.update_details(status=status)

        driver.release(deliveries=1)

        assert driver.is_available is False
        assert driver.total_deliveries == 1

    def test_suspended_driver_cannot_be_made_available(self) -> None:
        driver = _driver()
        driver.update_details(status=DriverStatus.SUSPENDED)

        with pytest.raises(BusinessRuleViolationError):
            driver.set_availability(True)
