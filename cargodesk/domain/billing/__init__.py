"""
Billing bounded context - Domain layer.

Aggregates:
- Invoice: line items and the derived totals
- Payment: settled money applied to an invoice
"""
