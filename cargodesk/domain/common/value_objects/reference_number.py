"""
Human-readable reference numbers.

Every document the business hands to a customer carries a reference of the
form ``PREFIX-<period>-<sequence>``, e.g. ``INV-2025-000042``. The sequence
restarts for every period and is zero padded to a fixed width.
"""

from dataclasses import dataclass
from datetime import date
from typing import Literal

from ..exceptions import ValidationError
from ..value_object import ValueObject

PeriodGranularity = Literal["year", "day"]

_PERIOD_FORMATS: dict[str, str] = {"year": "%Y", "day": "%Y%m%d"}


@dataclass(frozen=True)
class ReferenceFormat(ValueObject):
    """Layout of one family of reference numbers."""

    prefix: str
    period: PeriodGranularity
    width: int

    def period_prefix(self, on: date) -> str:
        """The shared leading part of every reference issued in the period of ``on``."""
        return f"{self.prefix}-{on.strftime(_PERIOD_FORMATS[self.period])}-"

    def format(self, on: date, sequence: int) -> str:
        """
        Render the reference for a sequence number.

        Raises:
            ValidationError: If the sequence is not positive
        """
        if sequence < 1:
            raise ValidationError("Sequence must be positive", field="sequence", value=sequence)
        return f"{self.period_prefix(on)}{sequence:0{self.width}d}"

    def parse_sequence(self, reference: str) -> int | None:
        """Extract the sequence part of a reference of this format, if it is one."""
        prefix, _, tail = reference.rpartition("-")
        if not prefix.startswith(f"{self.prefix}-") or not tail.isdigit():
            return None
        return int(tail)

    def next_after(self, on: date, last_reference: str | None) -> str:
        """Return the reference following ``last_reference`` within the period of ``on``."""
        sequence = 0
        if last_reference and last_reference.startswith(self.period_prefix(on)):
            sequence = self.parse_sequence(last_reference) or 0
        return self.format(on, sequence + 1)


CUSTOMER_CODE = ReferenceFormat(prefix="CUS", period="year", width=4)
TRACKING_NUMBER = ReferenceFormat(prefix="RT", period="year", width=6)
INVOICE_NUMBER = ReferenceFormat(prefix="INV", period="year", width=6)
PAYMENT_NUMBER = ReferenceFormat(prefix="PAY", period="year", width=6)
DECLARATION_NUMBER = ReferenceFormat(prefix="CD", period="year", width=6)
TICKET_NUMBER = ReferenceFormat(prefix="TKT", period="year", width=5)
NOTIFICATION_NUMBER = ReferenceFormat(prefix="NOTIF", period="day", width=6)
DRIVER_CODE = ReferenceFormat(prefix="DRV", period="year", width=4)
ROUTE_NUMBER = ReferenceFormat(prefix="RTE", period="day", width=3)
