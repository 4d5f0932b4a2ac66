"""
Domain service that prices a parcel before it is booked.

Every service has a tariff: a fixed charge plus a rate per billable
kilogram. A delivery to a home address pays a residential surcharge.
Parcels crossing a border are only offered the international service.

Account holders earn two discounts, both taken as a percentage of the
base price: a loyalty discount on what they have paid so far and a
volume discount on the shipments booked this calendar month.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.money import ZERO, percent_of, to_money
from cargodesk.domain.shipping.entities.shipment import ServiceType, billable_weight


@dataclass(frozen=True)
class Tariff:
    base_charge: Decimal
    per_kg: Decimal
    transit_days: int


TARIFFS: dict[ServiceType, Tariff] = {
    ServiceType.STANDARD: Tariff(Decimal(15000), Decimal(2500), 4),
    ServiceType.EXPRESS: Tariff(Decimal(25000), Decimal(4000), 2),
    ServiceType.OVERNIGHT: Tariff(Decimal(50000), Decimal(6000), 1),
    # standard x2.5, five more days
    ServiceType.INTERNATIONAL: Tariff(Decimal(37500), Decimal(6250), 9),
}

DOMESTIC_SERVICES = (ServiceType.STANDARD, ServiceType.EXPRESS, ServiceType.OVERNIGHT)
RESIDENTIAL_SURCHARGE = Decimal(4500)

# (minimum, percent), highest tier first
LOYALTY_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal(12_500_000), Decimal(15)),
    (Decimal(6_250_000), Decimal(10)),
    (Decimal(2_500_000), Decimal(5)),
)
VOLUME_TIERS: tuple[tuple[int, Decimal], ...] = (
    (50, Decimal(15)),
    (25, Decimal(10)),
    (10, Decimal(5)),
)


def loyalty_discount(total_paid: Decimal) -> Decimal:
    """Loyalty percentage for a customer's lifetime payments."""
    for minimum, percent in LOYALTY_TIERS:
        if total_paid >= minimum:
            return percent
    return ZERO


def volume_discount(monthly_shipments: int) -> Decimal:
    for minimum, percent in VOLUME_TIERS:
        if monthly_shipments >= minimum:
            return percent
    return ZERO


def format_transit_time(days: int) -> str:
    if days == 1:
        return "Next business day"
    if days <= 2:
        return "1-2 business days"
    if days <= 5:
        return "3-5 business days"
    if days <= 7:
        return "5-7 business days"
    return "7-14 business days"


@dataclass(frozen=True)
class RateDiscount:
    kind: str
    percent: Decimal
    amount: Decimal


@dataclass(frozen=True)
class RateQuote:
    service_type: ServiceType
    base_price: Decimal
    price: Decimal
    transit_days: int
    delivery_date: date
    discounts: list[RateDiscount] = field(default_factory=list)

    @property
    def transit_time(self) -> str:
        return format_transit_time(self.transit_days)

    @property
    def total_discount(self) -> Decimal:
        return to_money(sum((d.amount for d in self.discounts), ZERO))


class RateCalculator:
    """Prices every service available for a parcel, cheapest first."""

    def quote(
        self,
        *,
        weight_kg: Decimal,
        length_cm: Decimal,
        width_cm: Decimal,
        height_cm: Decimal,
        today: date,
        international: bool = False,
        residential: bool = False,
        loyalty_percent: Decimal = ZERO,
        volume_percent: Decimal = ZERO,
    ) -> list[RateQuote]:
        """
        Quote each service on the parcel's billable weight.

        Raises:
            ValidationError: If the weight or a dimension is not positive
        """
        for name, value in (
            ("weight_kg", weight_kg),
            ("length_cm", length_cm),
            ("width_cm", width_cm),
            ("height_cm", height_cm),
        ):
            if Decimal(value) <= 0:
                raise ValidationError("Must be greater than zero", field=name)

        weight = billable_weight(weight_kg, length_cm, width_cm, height_cm)
        services = (ServiceType.INTERNATIONAL,) if international else DOMESTIC_SERVICES

        quotes = []
        for service in services:
            tariff = TARIFFS[service]
            base_price = tariff.base_charge + tariff.per_kg * weight
            if residential:
                base_price += RESIDENTIAL_SURCHARGE
            base_price = to_money(base_price)

            discounts = [
                RateDiscount(kind, percent, percent_of(base_price, percent))
                for kind, percent in (("loyalty", loyalty_percent), ("volume", volume_percent))
                if percent > 0
            ]
            price = max(ZERO, base_price - sum((d.amount for d in discounts), ZERO))
            quotes.append(
                RateQuote(
                    service_type=service,
                    base_price=base_price,
                    price=to_money(price),
                    transit_days=tariff.transit_days,
                    delivery_date=today + timedelta(days=tariff.transit_days),
                    discounts=discounts,
                )
            )
        return sorted(quotes, key=lambda q: q.price)
