from .shipment_repository import ShipmentRepositoryProtocol

__all__ = ["ShipmentRepositoryProtocol"]
