"""Mapper for User ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.ids import CustomerId, UserId
from cargodesk.domain.identity.entities.user import User, UserRole
from cargodesk.models import User as UserORM
from cargodesk.utils import ensure_utc


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            email=orm_model.email,
            name=orm_model.name,
            role=UserRole(orm_model.role),
            customer_id=CustomerId(orm_model.customer_id) if orm_model.customer_id else None,
            hashed_password=orm_model.hashed_password,
            is_active=orm_model.is_active,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: User, orm_model: UserORM | None = None) -> UserORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Update existing
            orm_model.email = domain_entity.email
            orm_model.name = domain_entity.name
            orm_model.role = domain_entity.role
            orm_model.hashed_password = domain_entity.hashed_password
            orm_model.is_active = domain_entity.is_active
            return orm_model

        # Create new
        return UserORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            email=domain_entity.email,
            name=domain_entity.name,
            role=domain_entity.role,
            customer_id=domain_entity.customer_id.value if domain_entity.customer_id else None,
            hashed_password=domain_entity.hashed_password,
            is_active=domain_entity.is_active,
        )
