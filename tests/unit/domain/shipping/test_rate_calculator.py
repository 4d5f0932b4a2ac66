"""Tests for RateCalculator domain service."""

from datetime import date
from decimal import Decimal

import pytest

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.shipping.entities.shipment import ServiceType
from cargodesk.domain.shipping.services.rate_calculator import (
    RateCalculator,
    format_transit_time,
    loyalty_discount,
    volume_discount,
)

TODAY = date(2026, 10, 19)

# 40 x 30 x 20 is 4.8 kg dimensional, so the actual 10 kg is billed
PARCEL = {
    "weight_kg": Decimal("10"),
    "length_cm": Decimal("40"),
    "width_cm": Decimal("30"),
    "height_cm": Decimal("20"),
}


class TestRateCalculator:
    """Test suite for RateCalculator.quote."""

    def test_domestic_services_cheapest_first(self) -> None:
        quotes = RateCalculator().quote(**PARCEL, today=TODAY)

        assert [q.service_type for q in quotes] == [
            ServiceType.STANDARD,
            ServiceType.EXPRESS,
            ServiceType.OVERNIGHT,
        ]
        assert [q.price for q in quotes] == [
            Decimal("40000.00"),
            Decimal("65000.00"),
            Decimal("110000.00"),
        ]
        assert quotes[0].delivery_date == date(2026, 10, 23)
        assert quotes[2].transit_time == "Next business day"

    def test_bulky_parcel_billed_on_dimensional_weight(self) -> None:
        quotes = RateCalculator().quote(
            weight_kg=Decimal("2"),
            length_cm=Decimal("100"),
            width_cm=Decimal("50"),
            height_cm=Decimal("50"),
            today=TODAY,
        )

        # 50 kg dimensional
        assert quotes[0].base_price == Decimal("140000.00")

    def test_international_only_offers_international(self) -> None:
        quotes = RateCalculator().quote(**PARCEL, today=TODAY, international=True)

        assert len(quotes) == 1
        assert quotes[0].service_type == ServiceType.INTERNATIONAL
        assert quotes[0].price == Decimal("100000.00")
        assert quotes[0].transit_days == 9
        assert quotes[0].transit_time == "7-14 business days"

    def test_residential_surcharge(self) -> None:
        quotes = RateCalculator().quote(**PARCEL, today=TODAY, residential=True)

        assert quotes[0].base_price == Decimal("44500.00")

    def test_discounts_come_off_base_price(self) -> None:
        quotes = RateCalculator().quote(
            **PARCEL,
            today=TODAY,
            loyalty_percent=Decimal(10),
            volume_percent=Decimal(5),
        )

        standard = quotes[0]
        assert [(d.kind, d.amount) for d in standard.discounts] == [
            ("loyalty", Decimal("4000.00")),
            ("volume", Decimal("2000.00")),
        ]
        assert standard.total_discount == Decimal("6000.00")
        assert standard.price == Decimal("34000.00")

    def test_no_discount_lines_without_discounts(self) -> None:
        quotes = RateCalculator().quote(**PARCEL, today=TODAY)

        assert quotes[0].discounts == []
        assert quotes[0].price == quotes[0].base_price

    @pytest.mark.parametrize("field", ["weight_kg", "height_cm"])
    def test_rejects_non_positive_measurements(self, field: str) -> None:
        with pytest.raises(ValidationError):
            RateCalculator().quote(**{**PARCEL, field: Decimal("0")}, today=TODAY)


class TestDiscountTiers:
    """Test suite for loyalty and volume tiers."""

    @pytest.mark.parametrize(
        ("total_paid", "percent"),
        [
            ("0", "0"),
            ("2499999.99", "0"),
            ("2500000", "5"),
            ("6250000", "10"),
            ("12500000", "15"),
        ],
    )
    def test_loyalty(self, total_paid: str, percent: str) -> None:
        assert loyalty_discount(Decimal(total_paid)) == Decimal(percent)

    @pytest.mark.parametrize(
        ("shipments", "percent"),
        [(9, "0"), (10, "5"), (25, "10"), (49, "10"), (50, "15")],
    )
    def test_volume(self, shipments: int, percent: str) -> None:
        assert volume_discount(shipments) == Decimal(percent)


@pytest.mark.parametrize(
    ("days", "label"),
    [
        (1, "Next business day"),
        (2, "1-2 business days"),
        (4, "3-5 business days"),
        (7, "5-7 business days"),
        (9, "7-14 business days"),
    ],
)
def test_format_transit_time(days: int, label: str) -> None:
    assert format_transit_time(days) == label
