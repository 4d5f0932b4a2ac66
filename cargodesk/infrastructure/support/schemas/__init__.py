from cargodesk.infrastructure.support.schemas.support_schemas import (
    TicketAssignRequest,
    TicketCreateRequest,
    TicketRatingRequest,
    TicketReplyRequest,
    TicketReplyResponse,
    TicketResponse,
    TicketStatusRequest,
)

__all__ = [
    "TicketAssignRequest",
    "TicketCreateRequest",
    "TicketRatingRequest",
    "TicketReplyRequest",
    "TicketReplyResponse",
    "TicketResponse",
    "TicketStatusRequest",
]
