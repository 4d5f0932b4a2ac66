"""Support domain exceptions."""

from cargodesk.domain.common.exceptions import EntityNotFoundError


class SupportTicketNotFoundError(EntityNotFoundError):
    """Raised when a support ticket cannot be found."""

    def __init__(self, ticket_id: int) -> None:
        super().__init__("Support ticket", ticket_id)
