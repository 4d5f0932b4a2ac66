from typing import Protocol

from cargodesk.domain.common.value_objects.ids import UserId
from cargodesk.domain.identity.entities.user import User, UserRole


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def list_by_role(self, role: UserRole | None = None) -> list[User]: ...

    def save(self, user: User) -> User: ...
