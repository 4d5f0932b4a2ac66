"""Support bounded context - Domain layer."""
