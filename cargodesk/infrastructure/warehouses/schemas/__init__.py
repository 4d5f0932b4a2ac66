from cargodesk.infrastructure.warehouses.schemas.warehouse_schemas import (
    WarehouseCreateRequest,
    WarehouseDistanceResponse,
    WarehouseResponse,
    WarehouseStatusResponse,
    WarehouseUpdateRequest,
)

__all__ = [
    "WarehouseCreateRequest",
    "WarehouseDistanceResponse",
    "WarehouseResponse",
    "WarehouseStatusResponse",
    "WarehouseUpdateRequest",
]
