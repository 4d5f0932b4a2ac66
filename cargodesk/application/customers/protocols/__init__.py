from .customer_repository import CustomerRepositoryProtocol

__all__ = ["CustomerRepositoryProtocol"]
