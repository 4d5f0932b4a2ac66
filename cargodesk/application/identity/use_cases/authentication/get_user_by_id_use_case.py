"""Use case for getting a user by ID (used internally by dependency injection)."""

import structlog

from cargodesk.application.identity.protocols.user_repository import UserRepositoryProtocol
from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.identity.entities.user import User
from cargodesk.domain.identity.exceptions import UserNotFoundError

logger = structlog.get_logger(__name__)


class GetUserByIdUseCase:
    """Use case for getting a user by ID (used internally by dependency injection)."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository

    def get_user(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If user is not found
        """
        user = self.user_repository.find_by_id(UserId(user_id))
        if not user:
            raise UserNotFoundError(user_id)
        return user
