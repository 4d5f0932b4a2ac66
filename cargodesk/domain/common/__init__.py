"""
Domain common module.

Base classes shared by every bounded context.
"""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity, EntityId
from .exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStatusTransitionError,
    InvariantViolationError,
    ValidationError,
)
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "AuthorizationError",
    "BusinessRuleViolationError",
    "DomainError",
    "DomainEvent",
    "DuplicateEntityError",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "InvalidStatusTransitionError",
    "InvariantViolationError",
    "ValidationError",
    "ValueObject",
]
