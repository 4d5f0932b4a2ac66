from .support_ticket_repository import SupportTicketRepositoryProtocol

__all__ = ["SupportTicketRepositoryProtocol"]
