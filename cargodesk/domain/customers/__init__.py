"""
Customers bounded context - Domain layer.

Customer accounts, their payment terms and the approval flow for
self-registered customers.
"""
