"""Use case for staff account administration."""

import structlog

from cargodesk.application.identity.protocols.password_service import PasswordServiceProtocol
from cargodesk.application.identity.protocols.user_repository import UserRepositoryProtocol
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.identity.entities.user import User, UserRole
from cargodesk.domain.identity.exceptions import EmailAlreadyExistsError, UserNotFoundError

logger = structlog.get_logger(__name__)


class UserManagementUseCase:
    """Admin-side user operations and the startup admin bootstrap."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
    ) -> None:
        self.user_repository = user_repository
        self.password_service = password_service

    def create_staff_user(
        self, email: str, name: str, password: str, role: UserRole = UserRole.STAFF
    ) -> User:
        """
        Create an admin or staff account.

        Raises:
            ValidationError: If role is customer
            EmailAlreadyExistsError: If email is already registered
        """
        if role == UserRole.CUSTOMER:
            raise ValidationError(
                "Customer logins are created through registration", field="role", value=role
            )
        normalized_email = email.strip().lower()
        if self.user_repository.find_by_email(normalized_email):
            raise EmailAlreadyExistsError(normalized_email)

        user = User.create(
            email=normalized_email,
            name=name,
            role=role,
            hashed_password=self.password_service.hash_password(password),
        )
        user = self.user_repository.save(user)

        logger.info("staff_user_created", user_id=user.id.value, role=role)
        return user

    def list_users(self, role: UserRole | None = None) -> list[User]:
        return self.user_repository.list_by_role(role)

    def deactivate_user(self, user_id: int, acting_user_id: int) -> User:
        """
        Disable a login.

        Raises:
            UserNotFoundError: If user is not found
            ValidationError: If an admin tries to deactivate themselves
        """
        if user_id == acting_user_id:
            raise ValidationError("You cannot deactivate your own account", field="user_id")
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        user.deactivate()
        user = self.user_repository.save(user)
        logger.info("user_deactivated", user_id=user_id, by=acting_user_id)
        return user

    def ensure_admin(self, email: str, password: str) -> User | None:
        """
        Create the bootstrap admin if no user holds that email yet.

        Returns:
            The created admin, or None when nothing was created
        """
        if not email or not password:
            return None
        normalized_email = email.strip().lower()
        if self.user_repository.find_by_email(normalized_email):
            return None

        admin = User.create(
            email=normalized_email,
            name="Administrator",
            role=UserRole.ADMIN,
            hashed_password=self.password_service.hash_password(password),
        )
        admin = self.user_repository.save(admin)
        logger.info("admin_user_bootstrapped", user_id=admin.id.value)
        return admin
