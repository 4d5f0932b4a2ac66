from .delivery_route_repository import DeliveryRouteRepository
from .driver_repository import DriverRepository

__all__ = ["DeliveryRouteRepository", "DriverRepository"]
