from .support_ticket_repository import SupportTicketRepository

__all__ = ["SupportTicketRepository"]
