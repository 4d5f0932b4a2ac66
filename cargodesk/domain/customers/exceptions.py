"""Customer domain exceptions."""

from cargodesk.domain.common.exceptions import DuplicateEntityError, EntityNotFoundError


class CustomerNotFoundError(EntityNotFoundError):
    """Raised when a customer cannot be found."""

    def __init__(self, customer_id: int) -> None:
        super().__init__("Customer", customer_id)


class CustomerEmailExistsError(DuplicateEntityError):
    """Raised when another customer already uses the email."""

    def __init__(self, email: str) -> None:
        super().__init__(f"A customer with email {email} already exists", {"email": email})
        self.email = email
