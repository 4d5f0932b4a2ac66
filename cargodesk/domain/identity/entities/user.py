"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.ids import CustomerId, UserId

# Domain constraints
MAX_EMAIL_LENGTH = 100


class UserRole(StrEnum):
    """What a user may see and do."""

    ADMIN = "admin"
    STAFF = "staff"
    CUSTOMER = "customer"


@dataclass
class User(Entity[UserId]):
    """
    User entity representing an authenticated user in the system.

    Business Rules:
    - Email must be unique (enforced at repository level)
    - Email must be non-empty and at most MAX_EMAIL_LENGTH chars
    - Customer users are linked to exactly one customer account
    - Staff and admin users are not linked to a customer
    """

    id: UserId
    email: str
    name: str
    role: UserRole = UserRole.CUSTOMER
    customer_id: CustomerId | None = None
    hashed_password: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self._validate_email(self.email)
        if not self.name or not self.name.strip():
            raise ValidationError("Name cannot be empty", field="name", value=self.name)
        if self.role == UserRole.CUSTOMER and self.customer_id is None:
            raise ValidationError(
                "Customer users must be linked to a customer", field="customer_id"
            )
        if self.role != UserRole.CUSTOMER and self.customer_id is not None:
            raise ValidationError(
                "Staff users cannot be linked to a customer", field="customer_id"
            )

    @staticmethod
    def _validate_email(email: str) -> None:
        if not email:
            raise ValidationError("Email cannot be empty", field="email", value=email)
        if len(email) > MAX_EMAIL_LENGTH:
            raise ValidationError(
                f"Email cannot exceed {MAX_EMAIL_LENGTH} characters", field="email", value=email
            )

    @property
    def is_staff(self) -> bool:
        """Admins count as staff."""
        return self.role in (UserRole.ADMIN, UserRole.STAFF)

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER

    def has_password(self) -> bool:
        """Check if this user has a password set."""
        return self.hashed_password is not None

    def rename(self, name: str) -> None:
        """
        Change the display name.

        Raises:
            ValidationError: If name is empty
        """
        if not name or not name.strip():
            raise ValidationError("Name cannot be empty", field="name", value=name)
        self.name = name.strip()

    def update_email(self, new_email: str) -> None:
        """
        Update the user's email address.

        Raises:
            ValidationError: If email is invalid
        """
        self._validate_email(new_email)
        self.email = new_email

    def update_password(self, new_hashed_password: str) -> None:
        """Update the user's password (hashing done by infrastructure)."""
        self.hashed_password = new_hashed_password

    def deactivate(self) -> None:
        self.is_active = False

    @classmethod
    def create(
        cls,
        email: str,
        name: str,
        role: UserRole = UserRole.CUSTOMER,
        customer_id: CustomerId | None = None,
        hashed_password: str | None = None,
    ) -> "User":
        """
        Create a new user.

        Raises:
            ValidationError: If email, name or customer link is invalid
        """
        return cls(
            id=UserId.generate(),
            email=email.strip().lower(),
            name=name.strip(),
            role=role,
            customer_id=customer_id,
            hashed_password=hashed_password,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        email: str,
        name: str,
        role: UserRole,
        customer_id: CustomerId | None,
        hashed_password: str | None,
        is_active: bool,
        created_at: datetime | None,
        updated_at: datetime | None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            email=email,
            name=name,
            role=role,
            customer_id=customer_id,
            hashed_password=hashed_password,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )
