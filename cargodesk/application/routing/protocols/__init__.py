from .delivery_route_repository import DeliveryRouteRepositoryProtocol
from .driver_repository import DriverRepositoryProtocol

__all__ = ["DeliveryRouteRepositoryProtocol", "DriverRepositoryProtocol"]
