"""Customs bounded context - Domain layer."""
