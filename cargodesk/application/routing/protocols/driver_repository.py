from datetime import date
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import DriverId
from cargodesk.domain.routing.entities.driver import Driver, DriverStatus


class DriverRepositoryProtocol(Protocol):
    def find_by_id(self, driver_id: DriverId) -> Driver | None: ...

    def find_by_email(self, email: str) -> Driver | None: ...

    def find_by_license_number(self, license_number: str) -> Driver | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DriverStatus | None = None,
        available: bool | None = None,
    ) -> tuple[list[Driver], int]: ...

    def next_driver_code(self, on: date) -> str: ...

    def save(self, driver: Driver) -> Driver: ...

    def delete(self, driver: Driver) -> None: ...
