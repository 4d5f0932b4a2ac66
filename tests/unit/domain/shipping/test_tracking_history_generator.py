"""Tests for TrackingHistoryGenerator domain service."""

import random
from datetime import UTC, datetime, timedelta

import pytest

from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.shipping.entities.shipment import ShipmentStatus
from cargodesk.domain.shipping.services.tracking_history_generator import (
    TrackingHistoryGenerator,
    status_path,
)

STARTED = datetime(2026, 10, 1, 9, 0, tzinfo=UTC)


class TestStatusPath:
    """Test suite for status_path."""

    def test_delivery_flow(self) -> None:
        assert status_path(ShipmentStatus.DELIVERED) == (
            ShipmentStatus.PENDING,
            ShipmentStatus.PICKED_UP,
            ShipmentStatus.IN_TRANSIT,
            ShipmentStatus.OUT_FOR_DELIVERY,
            ShipmentStatus.DELIVERED,
        )

    def test_pending_only(self) -> None:
        assert status_path(ShipmentStatus.PENDING) == (ShipmentStatus.PENDING,)

    def test_exception_branches_after_transit(self) -> None:
        path = status_path(ShipmentStatus.EXCEPTION)

        assert path[-2:] == (ShipmentStatus.IN_TRANSIT, ShipmentStatus.EXCEPTION)
        assert ShipmentStatus.DELIVERED not in path
        assert ShipmentStatus.OUT_FOR_DELIVERY not in path

    def test_cancelled_straight_from_pending(self) -> None:
        assert status_path(ShipmentStatus.CANCELLED) == (
            ShipmentStatus.PENDING,
            ShipmentStatus.CANCELLED,
        )


class TestTrackingHistoryGenerator:
    """Test suite for TrackingHistoryGenerator."""

    def test_events_are_spaced_in_time(self) -> None:
        generator = TrackingHistoryGenerator(random.Random(7))

        events = generator.generate(ShipmentStatus.OUT_FOR_DELIVERY, STARTED, "Dar es Salaam")

        assert [event.status for event in events][-1] == ShipmentStatus.OUT_FOR_DELIVERY
        assert events[0].occurred_at == STARTED
        gaps = [b.occurred_at - a.occurred_at for a, b in zip(events, events[1:], strict=False)]
        assert all(timedelta(hours=2) <= gap <= timedelta(hours=24) for gap in gaps)
        assert {event.location for event in events} == {"Dar es Salaam"}
        assert events[1].notes == "Package picked up from sender"

    def test_same_seed_same_history(self) -> None:
        first = TrackingHistoryGenerator(random.Random(42)).generate(
            ShipmentStatus.DELIVERED, STARTED
        )
        second = TrackingHistoryGenerator(random.Random(42)).generate(
            ShipmentStatus.DELIVERED, STARTED
        )

        assert [e.occurred_at for e in first] == [e.occurred_at for e in second]

    def test_unknown_location(self) -> None:
        events = TrackingHistoryGenerator().generate(ShipmentStatus.PICKED_UP, STARTED, "  ")

        assert events[0].location == "Unknown"

    def test_naive_start_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TrackingHistoryGenerator().generate(
                ShipmentStatus.PICKED_UP, datetime(2026, 10, 1, 9, 0)
            )
