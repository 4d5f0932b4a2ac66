from .support_ticket_use_case import SupportTicketUseCase

__all__ = ["SupportTicketUseCase"]
