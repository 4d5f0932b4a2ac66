"""Routing domain exceptions."""

from cargodesk.domain.common.exceptions import DuplicateEntityError, EntityNotFoundError


class DriverNotFoundError(EntityNotFoundError):
    """Raised when a driver cannot be found."""

    def __init__(self, driver_id: int) -> None:
        super().__init__("Driver", driver_id)


class DriverEmailExistsError(DuplicateEntityError):
    """Raised when another driver already uses the email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"A driver with email {email} already exists", {"email": email})
        self.email = email


class DriverLicenseExistsError(DuplicateEntityError):
    """Raised when another driver is registered under the licence number."""

    def __init__(self, license_number: str) -> None:
        super().__init__(
            f"A driver with license number {license_number} already exists",
            {"license_number": license_number},
        )
        self.license_number = license_number


class DeliveryRouteNotFoundError(EntityNotFoundError):
    """Raised when a delivery route cannot be found."""

    def __init__(self, route_id: int) -> None:
        super().__init__("Delivery route", route_id)
