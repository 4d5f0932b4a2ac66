"""Tests for the SupportTicket aggregate."""

from datetime import UTC, datetime, timedelta

import pytest

from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import CustomerId, UserId
from cargodesk.domain.support.entities.support_ticket import (
    ReplyType,
    SupportTicket,
    TicketPriority,
    TicketReply,
    TicketStatus,
)

OPENED = datetime(2026, 10, 1, 9, 0, tzinfo=UTC)


def _ticket(priority: TicketPriority = TicketPriority.MEDIUM) -> SupportTicket:
    ticket = SupportTicket.create(
        "TKT-2026-00001",
        CustomerId(1),
        "Parcel not delivered",
        "Tracking says out for delivery since Monday.",
        priority=priority,
    )
    ticket.created_at = OPENED
    return ticket


def _staff_reply(message: str = "Checking", internal: bool = False) -> TicketReply:
    return TicketReply.create(UserId(2), message, from_staff=True, is_internal=internal)


class TestTicketSla:
    """Test suite for SLA deadlines."""

    @pytest.mark.parametrize(
        ("priority", "hours"),
        [
            (TicketPriority.URGENT, 2),
            (TicketPriority.HIGH, 8),
            (TicketPriority.MEDIUM, 24),
            (TicketPriority.LOW, 72),
        ],
    )
    def test_due_at(self, priority: TicketPriority, hours: int) -> None:
        assert _ticket(priority).due_at() == OPENED + timedelta(hours=hours)

    def test_overdue_only_while_open(self) -> None:
        ticket = _ticket(TicketPriority.URGENT)
        later = OPENED + timedelta(hours=3)

        assert ticket.is_overdue(later) is True
        ticket.resolve(later)
        assert ticket.is_overdue(later) is False

    def test_not_overdue_before_deadline(self) -> None:
        assert _ticket().is_overdue(OPENED + timedelta(hours=23)) is False


class TestTicketReplies:
    """Test suite for the reply thread."""

    def test_first_staff_reply(self) -> None:
        ticket = _ticket()

        ticket.add_reply(_staff_reply(), now=OPENED + timedelta(hours=1, minutes=30))

        assert ticket.status == TicketStatus.IN_PROGRESS
        assert ticket.first_response_at == OPENED + timedelta(hours=1, minutes=30)
        assert ticket.response_time_hours == 1.5

    def test_internal_note_is_not_a_response(self) -> None:
        ticket = _ticket()

        ticket.add_reply(_staff_reply(internal=True))

        assert ticket.status == TicketStatus.OPEN
        assert ticket.first_response_at is None
        assert ticket.replies[0].type == ReplyType.NOTE
        assert ticket.public_replies() == []

    def test_customer_cannot_write_internal_notes(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            TicketReply.create(UserId(3), "secret", from_staff=False, is_internal=True)
        assert exc_info.value.field == "is_internal"

    def test_customer_reply_resumes_work(self) -> None:
        ticket = _ticket()
        ticket.change_status(TicketStatus.WAITING_CUSTOMER)

        ticket.add_reply(TicketReply.create(UserId(3), "Photo attached", from_staff=False))

        assert ticket.status == TicketStatus.IN_PROGRESS

    def test_closed_ticket_takes_no_replies(self) -> None:
        ticket = _ticket()
        ticket.close()

        with pytest.raises(BusinessRuleViolationError):
            ticket.add_reply(_staff_reply())

    def test_empty_reply(self) -> None:
        with pytest.raises(ValidationError):
            _staff_reply("   ")


class TestTicketLifecycle:
    """Test suite for resolution, closing and rating."""

    def test_close_sets_resolution(self) -> None:
        ticket = _ticket()
        closed_at = OPENED + timedelta(hours=10)

        ticket.close(closed_at)

        assert ticket.closed_at == closed_at
        assert ticket.resolved_at == closed_at
        assert ticket.resolution_time_hours == 10.0

    def test_closed_ticket_cannot_reopen(self) -> None:
        ticket = _ticket()
        ticket.close()

        with pytest.raises(InvalidStatusTransitionError):
            ticket.change_status(TicketStatus.OPEN)

    def test_rating(self) -> None:
        ticket = _ticket()

        with pytest.raises(BusinessRuleViolationError):
            ticket.rate(5)

        ticket.resolve()
        ticket.rate(4, "Quick fix")

        assert ticket.satisfaction_rating == 4
        assert ticket.satisfaction_feedback == "Quick fix"

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, rating: int) -> None:
        ticket = _ticket()
        ticket.resolve()

        with pytest.raises(ValidationError):
            ticket.rate(rating)
