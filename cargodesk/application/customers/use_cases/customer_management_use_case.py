"""
Customer management use case.

Handles CRUD and the approval workflow for customer accounts.
"""

from datetime import UTC, datetime
from decimal import Decimal

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.domain.common.value_objects.ids import CustomerId, UserId
from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus, PaymentTerms
from cargodesk.domain.customers.exceptions import CustomerEmailExistsError, CustomerNotFoundError

logger = structlog.get_logger(__name__)


class CustomerManagementUseCase:
    """Use case for customer account operations."""

    def __init__(self, customer_repository: CustomerRepositoryProtocol) -> None:
        self.customer_repository = customer_repository

    def create_customer(
        self,
        contact_person: str,
        email: str,
        phone: str,
        address_line_1: str,
        city: str,
        country: str,
        created_by: int | None = None,
        company_name: str | None = None,
        address_line_2: str | None = None,
        state_province: str | None = None,
        postal_code: str | None = None,
        tax_number: str | None = None,
        credit_limit: Decimal = Decimal("0"),
        payment_terms: PaymentTerms = PaymentTerms.NET_30,
        status: CustomerStatus = CustomerStatus.ACTIVE,
        notes: str | None = None,
    ) -> Customer:
        """
        Create a customer with the next customer code.

        Raises:
            CustomerEmailExistsError: If the email is taken
        """
        if self.customer_repository.find_by_email(email.strip().lower()):
            raise CustomerEmailExistsError(email)

        customer = Customer.create(
            customer_code=self.customer_repository.next_customer_code(datetime.now(UTC).date()),
            contact_person=contact_person,
            email=email,
            phone=phone,
            address_line_1=address_line_1,
            city=city,
            country=country,
            status=status,
            created_by=UserId(created_by) if created_by else None,
            company_name=company_name,
            address_line_2=address_line_2,
            state_province=state_province,
            postal_code=postal_code,
            tax_number=tax_number,
            credit_limit=credit_limit,
            payment_terms=payment_terms,
            notes=notes,
        )
        customer = self.customer_repository.save(customer)

        logger.info(
            "customer_created",
            customer_id=customer.id.value,
            customer_code=customer.customer_code,
        )
        return customer

    def get_customer(self, customer_id: int) -> Customer:
        """
        Raises:
            CustomerNotFoundError: If customer is not found or was deleted
        """
        customer = self.customer_repository.find_by_id(CustomerId(customer_id))
        if not customer:
            raise CustomerNotFoundError(customer_id)
        return customer

    def list_customers(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: CustomerStatus | None = None,
        country: str | None = None,
    ) -> PaginatedResult[Customer]:
        items, total = self.customer_repository.search(
            pagination, search=search, status=status, country=country
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def update_customer(self, customer_id: int, **changes: object) -> Customer:
        """
        Apply a partial update.

        Raises:
            CustomerNotFoundError: If customer is not found
            CustomerEmailExistsError: If the new email belongs to another customer
        """
        customer = self.get_customer(customer_id)

        new_email = changes.get("email")
        if isinstance(new_email, str):
            normalized = new_email.strip().lower()
            other = self.customer_repository.find_by_email(normalized)
            if other and other.id != customer.id:
                raise CustomerEmailExistsError(normalized)
            changes["email"] = normalized

        status = changes.pop("status", None)
        customer.update_details(**changes)
        if isinstance(status, CustomerStatus):
            customer.change_status(status)

        customer = self.customer_repository.save(customer)
        logger.info("customer_updated", customer_id=customer_id, fields=sorted(changes))
        return customer

    def approve_customer(self, customer_id: int) -> Customer:
        customer = self.get_customer(customer_id)
        customer.approve()
        customer = self.customer_repository.save(customer)
        logger.info("customer_approved", customer_id=customer_id)
        return customer

    def reject_customer(self, customer_id: int) -> Customer:
        customer = self.get_customer(customer_id)
        customer.reject()
        customer = self.customer_repository.save(customer)
        logger.info("customer_rejected", customer_id=customer_id)
        return customer

    def delete_customer(self, customer_id: int) -> None:
        customer = self.get_customer(customer_id)
        self.customer_repository.delete(customer)
        logger.info("customer_deleted", customer_id=customer_id)
