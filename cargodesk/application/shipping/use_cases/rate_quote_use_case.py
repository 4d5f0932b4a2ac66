"""Use case that prices a parcel for a customer before booking."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import structlog

from cargodesk.application.billing.protocols.invoice_repository import InvoiceRepositoryProtocol
from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.application.shipping.protocols.shipment_repository import (
    ShipmentRepositoryProtocol,
)
from cargodesk.domain.common.value_objects.ids import CustomerId
from cargodesk.domain.common.value_objects.money import ZERO
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.domain.shipping.entities.shipment import billable_weight
from cargodesk.domain.shipping.services.rate_calculator import (
    RateCalculator,
    RateQuote,
    loyalty_discount,
    volume_discount,
)

logger = structlog.get_logger(__name__)

QUOTE_VALIDITY = timedelta(hours=24)


@dataclass(frozen=True)
class RateQuoteResult:
    quotes: list[RateQuote]
    currency: str
    billable_weight: Decimal
    international: bool
    loyalty_percent: Decimal
    volume_percent: Decimal
    valid_until: datetime


class RateQuoteUseCase:
    def __init__(
        self,
        shipment_repository: ShipmentRepositoryProtocol,
        invoice_repository: InvoiceRepositoryProtocol,
        customer_repository: CustomerRepositoryProtocol,
        calculator: RateCalculator,
        currency: str,
    ) -> None:
        self.shipment_repository = shipment_repository
        self.invoice_repository = invoice_repository
        self.customer_repository = customer_repository
        self.calculator = calculator
        self.currency = currency

    def quote(
        self,
        *,
        origin_country: str,
        destination_country: str,
        weight_kg: Decimal,
        length_cm: Decimal,
        width_cm: Decimal,
        height_cm: Decimal,
        residential: bool = False,
        customer_id: int | None = None,
    ) -> RateQuoteResult:
        """
        Price every service available for the parcel.

        A parcel is international when the two countries differ. When a
        customer is named, their loyalty and volume discounts apply.

        Raises:
            CustomerNotFoundError: If the named customer does not exist
            ValidationError: If the weight or a dimension is not positive
        """
        now = datetime.now(UTC)
        international = origin_country.strip().upper() != destination_country.strip().upper()

        loyalty_percent = volume_percent = ZERO
        if customer_id is not None:
            cid = CustomerId(customer_id)
            if self.customer_repository.find_by_id(cid) is None:
                raise CustomerNotFoundError(customer_id)
            month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
            loyalty_percent = loyalty_discount(self.invoice_repository.total_paid(cid))
            volume_percent = volume_discount(
                self.shipment_repository.count_created_since(cid, month_start)
            )

        quotes = self.calculator.quote(
            weight_kg=weight_kg,
            length_cm=length_cm,
            width_cm=width_cm,
            height_cm=height_cm,
            today=now.date(),
            international=international,
            residential=residential,
            loyalty_percent=loyalty_percent,
            volume_percent=volume_percent,
        )
        logger.info(
            "rates_quoted",
            customer_id=customer_id,
            international=international,
            services=len(quotes),
            loyalty_percent=str(loyalty_percent),
            volume_percent=str(volume_percent),
        )
        return RateQuoteResult(
            quotes=quotes,
            currency=self.currency,
            billable_weight=billable_weight(weight_kg, length_cm, width_cm, height_cm),
            international=international,
            loyalty_percent=loyalty_percent,
            volume_percent=volume_percent,
            valid_until=now + QUOTE_VALIDITY,
        )
