from pydantic import BaseModel, EmailStr, Field

from cargodesk.domain.identity.entities.user import User, UserRole


class UserDetailsResponse(BaseModel):
    """Schema for returning user details."""

    id: int = Field(..., description="User id")
    email: str
    name: str
    role: UserRole
    customer_id: int | None = Field(None, description="Customer account of a customer login")
    is_active: bool

    @classmethod
    def from_domain(cls, user: User) -> "UserDetailsResponse":
        return cls(
            id=user.id.value,
            email=user.email,
            name=user.name,
            role=user.role,
            customer_id=user.customer_id.value if user.customer_id else None,
            is_active=user.is_active,
        )


class UserUpdateRequest(BaseModel):
    """Schema for updating user profile."""

    name: str | None = Field(None, min_length=1, max_length=255, description="New user name")
    current_password: str | None = Field(
        None, min_length=1, description="Current password (required when changing password)"
    )
    new_password: str | None = Field(
        None, min_length=8, description="New password (min 8 characters)"
    )


class CustomerRegisterRequest(BaseModel):
    """Schema for customer self-registration."""

    email: EmailStr = Field(..., description="Login and contact email")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    contact_person: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=30)
    address_line_1: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    company_name: str | None = Field(None, max_length=255)


class StaffUserCreateRequest(BaseModel):
    """Schema for an admin creating a staff or admin login."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: UserRole = UserRole.STAFF
