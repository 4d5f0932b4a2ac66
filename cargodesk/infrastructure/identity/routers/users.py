import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from cargodesk.application.identity.use_cases import (
    RegisterCustomerUseCase,
    UpdateUserUseCase,
    UserManagementUseCase,
)
from cargodesk.core import container
from cargodesk.domain.common.exceptions import DomainError
from cargodesk.domain.identity.entities.user import UserRole
from cargodesk.domain.identity.exceptions import (
    EmailAlreadyExistsError,
    PasswordVerificationError,
    RegistrationDisabledError,
)
from cargodesk.exceptions import CargodeskError
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.rate_limit import limiter
from cargodesk.infrastructure.identity.dependencies import AdminUser, CurrentUser
from cargodesk.infrastructure.identity.routers.auth import set_refresh_cookie
from cargodesk.infrastructure.identity.schemas import (
    CustomerRegisterRequest,
    StaffUserCreateRequest,
    UserDetailsResponse,
    UserUpdateRequest,
)
from cargodesk.infrastructure.identity.services.token_service import TokenWithRefresh

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # type: ignore[misc]
async def register(
    request: Request,
    response: Response,
    register_data: CustomerRegisterRequest,
    use_case: RegisterCustomerUseCase = Depends(
        inject_use_case(container.register_customer_use_case)
    ),
) -> TokenWithRefresh:
    """
    Register a new customer account.

    Creates the customer (pending approval) with its login and returns a
    token pair for immediate login.
    """
    try:
        _, token_pair = use_case.register_customer(
            email=register_data.email,
            password=register_data.password,
            contact_person=register_data.contact_person,
            phone=register_data.phone,
            address_line_1=register_data.address_line_1,
            city=register_data.city,
            country=register_data.country,
            company_name=register_data.company_name,
        )
        set_refresh_cookie(response, token_pair.refresh_token)
        return token_pair
    except RegistrationDisabledError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Customer registration is currently disabled",
        ) from None
    except EmailAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from None
    except (CargodeskError, DomainError, HTTPException):
        # Re-raise known exceptions - handled by exception handlers
        raise
    except Exception as e:
        logger.error(f"Failed to register customer: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/me")
async def get_me(current_user: CurrentUser) -> UserDetailsResponse:
    """Get the current user's profile information."""
    return UserDetailsResponse.from_domain(current_user)


@router.post("/me")
async def update_me(
    current_user: CurrentUser,
    update_data: UserUpdateRequest,
    use_case: UpdateUserUseCase = Depends(inject_use_case(container.update_user_use_case)),
) -> UserDetailsResponse:
    """
    Update the current user's profile.

    - To rename: provide `name`
    - To change password: provide both `current_password` and `new_password` fields
    """
    try:
        user = use_case.update_user(
            user_id=current_user.id.value,
            name=update_data.name,
            current_password=update_data.current_password,
            new_password=update_data.new_password,
        )
        return UserDetailsResponse.from_domain(user)
    except PasswordVerificationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        ) from None
    except (CargodeskError, DomainError, HTTPException):
        raise
    except Exception as e:
        logger.error(f"Failed to update user {current_user.id.value}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_staff_user(
    admin: AdminUser,
    user_data: StaffUserCreateRequest,
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> UserDetailsResponse:
    """Create a staff or admin login (admins only)."""
    try:
        user = use_case.create_staff_user(
            email=user_data.email,
            name=user_data.name,
            password=user_data.password,
            role=user_data.role,
        )
    except EmailAlreadyExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        ) from None
    logger.info(f"Admin {admin.id.value} created user {user.id.value} ({user.role})")
    return UserDetailsResponse.from_domain(user)


@router.get("")
async def list_users(
    admin: AdminUser,
    role: UserRole | None = Query(None, description="Only users with this role"),
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> list[UserDetailsResponse]:
    return [UserDetailsResponse.from_domain(user) for user in use_case.list_users(role)]


@router.post("/{user_id}/deactivate")
async def deactivate_user(
    user_id: int,
    admin: AdminUser,
    use_case: UserManagementUseCase = Depends(
        inject_use_case(container.user_management_use_case)
    ),
) -> UserDetailsResponse:
    """Disable a login. Admins cannot deactivate themselves."""
    user = use_case.deactivate_user(user_id, acting_user_id=admin.id.value)
    return UserDetailsResponse.from_domain(user)
