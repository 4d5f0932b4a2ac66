from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cargodesk.application.shipping.use_cases import RateQuoteResult
from cargodesk.domain.shipping.entities.shipment import ServiceType
from cargodesk.domain.shipping.services.rate_calculator import RateDiscount, RateQuote


class RateQuoteRequest(BaseModel):
    """Schema for pricing a parcel."""

    origin_country: str = Field(..., min_length=2, max_length=2, description="ISO country code")
    destination_country: str = Field(..., min_length=2, max_length=2)
    residential: bool = Field(False, description="Delivery to a home address")
    weight_kg: Decimal = Field(..., gt=0)
    length_cm: Decimal = Field(..., gt=0)
    width_cm: Decimal = Field(..., gt=0)
    height_cm: Decimal = Field(..., gt=0)
    customer_id: int | None = Field(
        None, description="Staff only: price with this customer's discounts"
    )


class RateDiscountResponse(BaseModel):
    kind: str
    percent: Decimal
    amount: Decimal

    @classmethod
    def from_domain(cls, discount: RateDiscount) -> "RateDiscountResponse":
        return cls(kind=discount.kind, percent=discount.percent, amount=discount.amount)


class RateResponse(BaseModel):
    service_type: ServiceType
    base_price: Decimal
    total_discount: Decimal
    price: Decimal
    transit_days: int
    transit_time: str
    delivery_date: date
    discounts: list[RateDiscountResponse]

    @classmethod
    def from_domain(cls, quote: RateQuote) -> "RateResponse":
        return cls(
            service_type=quote.service_type,
            base_price=quote.base_price,
            total_discount=quote.total_discount,
            price=quote.price,
            transit_days=quote.transit_days,
            transit_time=quote.transit_time,
            delivery_date=quote.delivery_date,
            discounts=[RateDiscountResponse.from_domain(d) for d in quote.discounts],
        )


class RateQuoteResponse(BaseModel):
    """Available services, cheapest first."""

    currency: str
    billable_weight: Decimal
    international: bool
    loyalty_percent: Decimal
    volume_percent: Decimal
    valid_until: datetime
    rates: list[RateResponse]

    @classmethod
    def from_result(cls, result: RateQuoteResult) -> "RateQuoteResponse":
        return cls(
            currency=result.currency,
            billable_weight=result.billable_weight,
            international=result.international,
            loyalty_percent=result.loyalty_percent,
            volume_percent=result.volume_percent,
            valid_until=result.valid_until,
            rates=[RateResponse.from_domain(q) for q in result.quotes],
        )
