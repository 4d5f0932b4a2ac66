from .rate_quote_use_case import RateQuoteResult, RateQuoteUseCase
from .shipment_management_use_case import ShipmentManagementUseCase

__all__ = ["RateQuoteResult", "RateQuoteUseCase", "ShipmentManagementUseCase"]
