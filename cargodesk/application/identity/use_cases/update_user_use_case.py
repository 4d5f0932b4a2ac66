"""Use case for user profile management."""

import structlog

from cargodesk.application.identity.protocols.password_service import PasswordServiceProtocol
from cargodesk.application.identity.protocols.user_repository import UserRepositoryProtocol
from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.identity.entities.user import User
from cargodesk.domain.identity.exceptions import PasswordVerificationError, UserNotFoundError

logger = structlog.get_logger(__name__)


class UpdateUserUseCase:
    """Use case for user profile operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        password_service: PasswordServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.password_service = password_service

    def update_user(
        self,
        user_id: int,
        name: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
    ) -> User:
        """
        Update the user's profile.

        Args:
            user_id: ID of the user to update
            name: New display name (optional)
            current_password: Current password for verification (required if changing password)
            new_password: New password (optional)

        Returns:
            Updated user entity

        Raises:
            UserNotFoundError: If user is not found
            PasswordVerificationError: If current_password is missing or incorrect
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)

        if name is not None:
            user.rename(name)

        if new_password is not None:
            if current_password is None:
                raise PasswordVerificationError

            if not user.hashed_password or not self.password_service.verify_password(
                current_password, user.hashed_password
            ):
                raise PasswordVerificationError

            user.update_password(self.password_service.hash_password(new_password))

        user = self.user_repository.save(user)

        logger.info("user_profile_updated", user_id=user_id)

        return user
