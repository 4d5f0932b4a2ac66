"""Driver roster management."""

from datetime import UTC, date, datetime
from typing import Any

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.routing.protocols.driver_repository import DriverRepositoryProtocol
from cargodesk.domain.common.exceptions import BusinessRuleViolationError
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import DriverId
from cargodesk.domain.routing.entities.driver import Driver, DriverStatus
from cargodesk.domain.routing.exceptions import (
    DriverEmailExistsError,
    DriverLicenseExistsError,
    DriverNotFoundError,
)

logger = structlog.get_logger(__name__)


class DriverManagementUseCase:
    """Use case for driver operations."""

    def __init__(self, driver_repository: DriverRepositoryProtocol) -> None:
        self.driver_repository = driver_repository

    def create_driver(
        self,
        name: str,
        email: str,
        phone: str,
        license_number: str,
        license_expiry: date,
        **optional: Any,  # noqa: ANN401
    ) -> Driver:
        """
        Raises:
            DriverEmailExistsError: If another driver uses the email
            DriverLicenseExistsError: If another driver holds the licence number
        """
        normalized_email = email.strip().lower()
        if self.driver_repository.find_by_email(normalized_email):
            raise DriverEmailExistsError(normalized_email)
        normalized_license = license_number.strip().upper()
        if self.driver_repository.find_by_license_number(normalized_license):
            raise DriverLicenseExistsError(normalized_license)

        driver = Driver.create(
            driver_code=self.driver_repository.next_driver_code(datetime.now(UTC).date()),
            name=name,
            email=email,
            phone=phone,
            license_number=license_number,
            license_expiry=license_expiry,
            **optional,
        )
        driver = self.driver_repository.save(driver)
        logger.info("driver_created", driver_id=driver.id.value, driver_code=driver.driver_code)
        return driver

    def get_driver(self, driver_id: int) -> Driver:
        driver = self.driver_repository.find_by_id(DriverId(driver_id))
        if not driver:
            raise DriverNotFoundError(driver_id)
        return driver

    def list_drivers(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DriverStatus | None = None,
        available: bool | None = None,
    ) -> PaginatedResult[Driver]:
        items, total = self.driver_repository.search(
            pagination, search=search, status=status, available=available
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def update_driver(self, driver_id: int, **changes: Any) -> Driver:  # noqa: ANN401
        driver = self.get_driver(driver_id)

        new_email = changes.get("email")
        if isinstance(new_email, str):
            normalized = new_email.strip().lower()
            other = self.driver_repository.find_by_email(normalized)
            if other and other.id != driver.id:
                raise DriverEmailExistsError(normalized)
            changes["email"] = normalized

        new_license = changes.get("license_number")
        if isinstance(new_license, str):
            normalized = new_license.strip().upper()
            other = self.driver_repository.find_by_license_number(normalized)
            if other and other.id != driver.id:
                raise DriverLicenseExistsError(normalized)
            changes["license_number"] = normalized

        driver.update_details(**changes)
        driver = self.driver_repository.save(driver)
        logger.info("driver_updated", driver_id=driver_id, fields=sorted(changes))
        return driver

    def update_location(self, driver_id: int, latitude: float, longitude: float) -> Driver:
        driver = self.get_driver(driver_id)
        driver.update_location(GeoPoint(latitude=latitude, longitude=longitude))
        driver = self.driver_repository.save(driver)
        logger.debug(
            "driver_location_updated", driver_id=driver_id, latitude=latitude, longitude=longitude
        )
        return driver

    def set_availability(self, driver_id: int, available: bool) -> Driver:
        driver = self.get_driver(driver_id)
        driver.set_availability(available)
        driver = self.driver_repository.save(driver)
        logger.info("driver_availability_changed", driver_id=driver_id, available=available)
        return driver

    def delete_driver(self, driver_id: int) -> None:
        """
        Raises:
            BusinessRuleViolationError: If the driver is out on a route
        """
        driver = self.get_driver(driver_id)
        if not driver.is_available and driver.status == DriverStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "driver_not_on_route", f"Driver {driver.driver_code} is assigned to a route"
            )
        self.driver_repository.delete(driver)
        logger.info("driver_deleted", driver_id=driver_id)
