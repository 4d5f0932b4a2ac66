from .warehouse import Warehouse, WarehouseStatus

__all__ = ["Warehouse", "WarehouseStatus"]
