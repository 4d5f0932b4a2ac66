"""Notifications bounded context - Domain layer."""
