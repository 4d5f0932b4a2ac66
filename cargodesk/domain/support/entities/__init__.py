from .support_ticket import (
    ReplyType,
    SupportTicket,
    TicketCategory,
    TicketPriority,
    TicketReply,
    TicketSource,
    TicketStatus,
)

__all__ = [
    "ReplyType",
    "SupportTicket",
    "TicketCategory",
    "TicketPriority",
    "TicketReply",
    "TicketSource",
    "TicketStatus",
]
