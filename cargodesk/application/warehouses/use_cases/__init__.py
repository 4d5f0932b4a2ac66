from .warehouse_management_use_case import WarehouseManagementUseCase

__all__ = ["WarehouseManagementUseCase"]
