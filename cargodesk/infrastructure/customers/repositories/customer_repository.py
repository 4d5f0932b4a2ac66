"""Repository for Customer domain entities."""

import logging
from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomerId
from cargodesk.domain.common.value_objects.reference_number import CUSTOMER_CODE
from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.infrastructure.common.queries import next_reference, paginate
from cargodesk.infrastructure.customers.mappers.customer_mapper import CustomerMapper
from cargodesk.models import Customer as CustomerORM
from cargodesk.utils import utc_now

logger = logging.getLogger(__name__)


class CustomerRepository:
    """Customer persistence. Soft-deleted customers are invisible to every query."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CustomerMapper()

    def _get_orm(self, customer_id: int) -> CustomerORM | None:
        stmt = select(CustomerORM).where(
            CustomerORM.id == customer_id, CustomerORM.deleted_at.is_(None)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def find_by_id(self, customer_id: CustomerId) -> Customer | None:
        orm_model = self._get_orm(customer_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_email(self, email: str) -> Customer | None:
        """
        Find a customer by email (already normalized).

        Deleted customers still hold their email so it cannot be reused.
        """
        stmt = select(CustomerORM).where(CustomerORM.email == email)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: CustomerStatus | None = None,
        country: str | None = None,
    ) -> tuple[list[Customer], int]:
        """
        Page through customers, newest first.

        Args:
            pagination: Offset/limit window
            search: Case-insensitive match on code, company, contact person or email
            status: Only customers in this status
            country: Only customers in this country
        """
        stmt = select(CustomerORM).where(CustomerORM.deleted_at.is_(None))
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    CustomerORM.customer_code.ilike(pattern),
                    CustomerORM.company_name.ilike(pattern),
                    CustomerORM.contact_person.ilike(pattern),
                    CustomerORM.email.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(CustomerORM.status == status)
        if country:
            stmt = stmt.where(CustomerORM.country == country)

        stmt = stmt.order_by(CustomerORM.created_at.desc(), CustomerORM.id.desc())
        rows, total = paginate(self.db, stmt, pagination)
        return [self.mapper.to_domain(row) for row in rows], total

    def next_customer_code(self, on: date) -> str:
        return next_reference(self.db, CustomerORM.customer_code, CUSTOMER_CODE, on)

    def save(self, customer: Customer) -> Customer:
        """
        Insert or update a customer.

        Raises:
            CustomerNotFoundError: If an existing customer is gone
        """
        if customer.id.value == 0:
            orm_model = self.mapper.to_orm(customer)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            logger.info(f"Created customer {orm_model.customer_code} (id={orm_model.id})")
            return self.mapper.to_domain(orm_model)

        orm_model = self._get_orm(customer.id.value)
        if not orm_model:
            raise CustomerNotFoundError(customer.id.value)
        self.mapper.to_orm(customer, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, customer: Customer) -> None:
        """Soft delete."""
        orm_model = self._get_orm(customer.id.value)
        if not orm_model:
            raise CustomerNotFoundError(customer.id.value)
        orm_model.deleted_at = utc_now()
        self.db.commit()
        logger.info(f"Soft deleted customer {customer.customer_code}")
