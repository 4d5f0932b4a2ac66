from .customer_notifier import CustomerNotifier

__all__ = ["CustomerNotifier"]
