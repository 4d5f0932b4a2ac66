from datetime import date
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId
from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus


class CustomerRepositoryProtocol(Protocol):
    def find_by_id(self, customer_id: CustomerId) -> Customer | None: ...

    def find_by_email(self, email: str) -> Customer | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: CustomerStatus | None = None,
        country: str | None = None,
    ) -> tuple[list[Customer], int]: ...

    def next_customer_code(self, on: date) -> str: ...

    def save(self, customer: Customer) -> Customer: ...

    def delete(self, customer: Customer) -> None: ...
