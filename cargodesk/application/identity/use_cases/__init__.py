from .authentication.authenticate_user_use_case import AuthenticateUserUseCase
from .authentication.get_user_by_id_use_case import GetUserByIdUseCase
from .authentication.refresh_access_token_use_case import RefreshAccessTokenUseCase
from .register_customer_use_case import RegisterCustomerUseCase
from .update_user_use_case import UpdateUserUseCase
from .user_management_use_case import UserManagementUseCase

__all__ = [
    "AuthenticateUserUseCase",
    "GetUserByIdUseCase",
    "RefreshAccessTokenUseCase",
    "RegisterCustomerUseCase",
    "UpdateUserUseCase",
    "UserManagementUseCase",
]
