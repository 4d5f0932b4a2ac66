from .warehouse_repository import WarehouseRepositoryProtocol

__all__ = ["WarehouseRepositoryProtocol"]
