from .delivery_route_use_case import DeliveryRouteUseCase
from .driver_management_use_case import DriverManagementUseCase

__all__ = ["DeliveryRouteUseCase", "DriverManagementUseCase"]
