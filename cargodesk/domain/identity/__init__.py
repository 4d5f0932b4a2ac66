"""Identity domain layer."""

from cargodesk.domain.identity.entities.user import User, UserRole
from cargodesk.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    InactiveUserError,
    InvalidCredentialsError,
    PasswordVerificationError,
    RegistrationDisabledError,
    UserNotFoundError,
)

__all__ = [
    "EmailAlreadyExistsError",
    "InactiveUserError",
    "InvalidCredentialsError",
    "PasswordVerificationError",
    "RegistrationDisabledError",
    "User",
    "UserNotFoundError",
    "UserRole",
]
