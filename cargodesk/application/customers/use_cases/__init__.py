from .customer_management_use_case import CustomerManagementUseCase

__all__ = ["CustomerManagementUseCase"]
