"""Shipping domain exceptions."""

from cargodesk.domain.common.exceptions import EntityNotFoundError


class ShipmentNotFoundError(EntityNotFoundError):
    """Raised when a shipment cannot be found."""

    def __init__(self, shipment_id: int | str) -> None:
        super().__init__("Shipment", shipment_id)
