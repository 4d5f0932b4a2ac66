"""Identity domain exceptions."""

from cargodesk.domain.common.exceptions import (
    DomainError,
    DuplicateEntityError,
    EntityNotFoundError,
)


class UserNotFoundError(EntityNotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int) -> None:
        super().__init__("User", user_id)


class EmailAlreadyExistsError(DuplicateEntityError):
    """Raised when attempting to register with an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already registered", {"email": email})
        self.email = email


class InvalidCredentialsError(DomainError):
    """Raised when authentication fails due to invalid credentials."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InactiveUserError(DomainError):
    """Raised when a deactivated user tries to sign in."""

    def __init__(self) -> None:
        super().__init__("This account has been deactivated")


class PasswordVerificationError(DomainError):
    """Raised when current password verification fails during password change."""

    def __init__(self) -> None:
        super().__init__("Current password is incorrect")


class RegistrationDisabledError(DomainError):
    """Raised when customer self-registration is disabled via feature flag."""

    def __init__(self) -> None:
        super().__init__("Customer registration is currently disabled")
