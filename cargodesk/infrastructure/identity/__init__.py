"""Identity infrastructure layer."""

from cargodesk.infrastructure.identity.dependencies import (
    AdminUser,
    CurrentUser,
    StaffUser,
    customer_scope,
    get_current_user,
    oauth2_scheme,
    require_staff,
)
from cargodesk.infrastructure.identity.repositories.user_repository import UserRepository

__all__ = [
    "AdminUser",
    "CurrentUser",
    "StaffUser",
    "UserRepository",
    "customer_scope",
    "get_current_user",
    "oauth2_scheme",
    "require_staff",
]
