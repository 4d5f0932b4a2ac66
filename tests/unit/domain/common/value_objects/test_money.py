"""Tests for money helpers."""

from decimal import Decimal

from cargodesk.domain.common.value_objects.money import ZERO, percent_of, to_money


class TestToMoney:
    """Test suite for to_money."""

    def test_rounds_half_up_to_cents(self) -> None:
        assert to_money("10.005") == Decimal("10.01")
        assert to_money("10.004") == Decimal("10.00")

    def test_none_is_zero(self) -> None:
        assert to_money(None) == ZERO

    def test_float_uses_shortest_repr(self) -> None:
        # Decimal(2.675) is 2.67499...
        assert to_money(2.675) == Decimal("2.68")

    def test_int(self) -> None:
        assert to_money(5) == Decimal("5.00")


class TestPercentOf:
    """Test suite for percent_of."""

    def test_vat(self) -> None:
        assert percent_of(Decimal("118000"), Decimal("18")) == Decimal("21240.00")

    def test_rounds_result(self) -> None:
        assert percent_of(Decimal("33.33"), Decimal("10")) == Decimal("3.33")
