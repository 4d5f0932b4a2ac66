"""Warehouse domain exceptions."""

from cargodesk.domain.common.exceptions import DuplicateEntityError, EntityNotFoundError


class WarehouseNotFoundError(EntityNotFoundError):
    """Raised when a warehouse cannot be found."""

    def __init__(self, warehouse_id: int) -> None:
        super().__init__("Warehouse", warehouse_id)


class WarehouseCodeExistsError(DuplicateEntityError):
    """Raised when the warehouse code is already taken."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Warehouse code {code} is already in use", {"code": code})
        self.code = code
