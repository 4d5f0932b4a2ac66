from .shipment_repository import ShipmentRepository

__all__ = ["ShipmentRepository"]
