"""
Domain layer exceptions.

Raised when a business rule or invariant is broken. The API layer maps
them onto HTTP responses in one place.
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: negative weight, latitude out of range.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class EntityNotFoundError(DomainError):
    """Raised when an entity cannot be found."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id})
        self.entity_type = entity_type
        self.entity_id = entity_id


class BusinessRuleViolationError(DomainError):
    """
    Raised when a business rule is violated.

    Example: recording a payment larger than the invoice balance.
    """

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, {"rule": rule})
        self.rule = rule


class InvalidStatusTransitionError(BusinessRuleViolationError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, entity_type: str, current: str, target: str) -> None:
        super().__init__(
            "status_transition",
            f"Cannot change {entity_type} status from '{current}' to '{target}'",
        )
        self.entity_type = entity_type
        self.current = current
        self.target = target


class InvariantViolationError(DomainError):
    """Raised when an aggregate invariant is violated."""

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant


class AuthorizationError(DomainError):
    """
    Raised when an operation is not authorized.

    Example: a customer opening another customer's invoice.
    """

    def __init__(self, message: str = "Not authorized to perform this action") -> None:
        super().__init__(message)


class DuplicateEntityError(DomainError):
    """Raised when a unique business key is already taken."""
