"""Tests for reference number formats."""

from datetime import date

import pytest

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.reference_number import (
    CUSTOMER_CODE,
    INVOICE_NUMBER,
    NOTIFICATION_NUMBER,
    ROUTE_NUMBER,
    TICKET_NUMBER,
    TRACKING_NUMBER,
)

TODAY = date(2026, 10, 17)


class TestReferenceFormat:
    """Test suite for ReferenceFormat."""

    def test_first_of_period(self) -> None:
        assert TRACKING_NUMBER.next_after(TODAY, None) == "RT-2026-000001"
        assert CUSTOMER_CODE.next_after(TODAY, None) == "CUS-2026-0001"
        assert TICKET_NUMBER.next_after(TODAY, None) == "TKT-2026-00001"

    def test_continues_sequence(self) -> None:
        assert INVOICE_NUMBER.next_after(TODAY, "INV-2026-000041") == "INV-2026-000042"

    def test_new_year_restarts(self) -> None:
        assert INVOICE_NUMBER.next_after(TODAY, "INV-2025-000900") == "INV-2026-000001"

    def test_daily_formats(self) -> None:
        assert NOTIFICATION_NUMBER.next_after(TODAY, None) == "NOTIF-20261017-000001"
        assert ROUTE_NUMBER.next_after(TODAY, "RTE-20261017-009") == "RTE-20261017-010"
        assert ROUTE_NUMBER.next_after(TODAY, "RTE-20261016-009") == "RTE-20261017-001"

    def test_parse_sequence(self) -> None:
        assert TRACKING_NUMBER.parse_sequence("RT-2026-000123") == 123
        assert TRACKING_NUMBER.parse_sequence("INV-2026-000123") is None
        assert TRACKING_NUMBER.parse_sequence("RT-2026-abc") is None

    def test_sequence_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            TRACKING_NUMBER.format(TODAY, 0)
