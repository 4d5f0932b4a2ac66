"""Decimal money helpers.

All amounts are kept as ``Decimal`` and rounded half-up to cents whenever a
value is stored on an entity.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal(100)


def to_money(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a value to a two-place Decimal. ``None`` becomes zero."""
    if value is None:
        return ZERO
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    """Return ``rate`` percent of ``amount``, rounded to cents."""
    return to_money(Decimal(amount) * Decimal(rate) / HUNDRED)
