from .warehouse_repository import WarehouseRepository

__all__ = ["WarehouseRepository"]
