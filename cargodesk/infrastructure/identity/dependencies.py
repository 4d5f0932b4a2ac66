"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from cargodesk.core import container
from cargodesk.database import DatabaseSession
from cargodesk.domain.identity.entities.user import User, UserRole
from cargodesk.domain.identity.exceptions import UserNotFoundError
from cargodesk.exceptions import CredentialsException, PermissionDeniedError
from cargodesk.infrastructure.identity.services.token_service import verify_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)], db: DatabaseSession
) -> User:
    """
    Get the current authenticated user from the access token.

    Args:
        token: JWT access token from Authorization header
        db: Database session

    Returns:
        User domain entity

    Raises:
        CredentialsException: If token is invalid, or the user is missing or inactive
    """
    user_id = verify_access_token(token)
    if user_id is None:
        raise CredentialsException

    container.db.override(db)
    try:
        user = container.get_user_by_id_use_case().get_user(user_id)
    except UserNotFoundError:
        raise CredentialsException from None
    finally:
        container.db.reset_override()

    if not user.is_active:
        raise CredentialsException
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def require_staff(current_user: CurrentUser) -> User:
    """Admins and staff only."""
    if not current_user.is_staff:
        raise PermissionDeniedError
    return current_user


async def require_admin(current_user: CurrentUser) -> User:
    if current_user.role != UserRole.ADMIN:
        raise PermissionDeniedError("Only administrators can perform this action")
    return current_user


StaffUser = Annotated[User, Depends(require_staff)]
AdminUser = Annotated[User, Depends(require_admin)]


def customer_scope(user: User) -> int | None:
    """Customer a request is limited to; None lets staff see every customer."""
    if not user.is_customer:
        return None
    if user.customer_id is None:
        raise PermissionDeniedError("This login is not linked to a customer account")
    return user.customer_id.value
