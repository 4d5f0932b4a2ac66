"""Identity context schemas."""

from cargodesk.infrastructure.identity.schemas.user_schemas import (
    CustomerRegisterRequest,
    StaffUserCreateRequest,
    UserDetailsResponse,
    UserUpdateRequest,
)

__all__ = [
    "CustomerRegisterRequest",
    "StaffUserCreateRequest",
    "UserDetailsResponse",
    "UserUpdateRequest",
]
