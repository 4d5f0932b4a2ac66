"""Warehouses bounded context - Domain layer."""
