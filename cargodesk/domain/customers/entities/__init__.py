from .customer import Customer, CustomerStatus, PaymentTerms

__all__ = ["Customer", "CustomerStatus", "PaymentTerms"]
