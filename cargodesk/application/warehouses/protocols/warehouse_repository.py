from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import WarehouseId
from cargodesk.domain.warehouses.entities.warehouse import Warehouse, WarehouseStatus


class WarehouseRepositoryProtocol(Protocol):
    def find_by_id(self, warehouse_id: WarehouseId) -> Warehouse | None: ...

    def find_by_code(self, code: str) -> Warehouse | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: WarehouseStatus | None = None,
    ) -> tuple[list[Warehouse], int]: ...

    def save(self, warehouse: Warehouse) -> Warehouse: ...

    def delete(self, warehouse: Warehouse) -> None: ...
