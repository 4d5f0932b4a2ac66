"""Use case for customer self-registration."""

from datetime import UTC, datetime

import structlog

from cargodesk.application.customers.protocols.customer_repository import (
    CustomerRepositoryProtocol,
)
from cargodesk.application.identity.protocols.password_service import PasswordServiceProtocol
from cargodesk.application.identity.protocols.token_service import TokenServiceProtocol
from cargodesk.application.identity.protocols.user_repository import UserRepositoryProtocol
from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus
from cargodesk.domain.identity.entities.user import User, UserRole
from cargodesk.domain.identity.exceptions import EmailAlreadyExistsError, RegistrationDisabledError
from cargodesk.feature_flags import is_customer_registrations_enabled
from cargodesk.infrastructure.identity.services.token_service import TokenWithRefresh

logger = structlog.get_logger(__name__)


class RegisterCustomerUseCase:
    """Use case for customer registration operations."""

    def __init__(
        self,
        user_repository: UserRepositoryProtocol,
        customer_repository: CustomerRepositoryProtocol,
        password_service: PasswordServiceProtocol,
        token_service: TokenServiceProtocol,
    ) -> None:
        """Initialize use case with dependencies."""
        self.user_repository = user_repository
        self.customer_repository = customer_repository
        self.password_service = password_service
        self.token_service = token_service

    def register_customer(
        self,
        email: str,
        password: str,
        contact_person: str,
        phone: str,
        address_line_1: str,
        city: str,
        country: str,
        company_name: str | None = None,
    ) -> tuple[User, TokenWithRefresh]:
        """
        Register a customer account and its login.

        The customer starts in pending_approval until staff approve it.

        Returns:
            Tuple of (created user, token pair for immediate login)

        Raises:
            RegistrationDisabledError: If registration is disabled via feature flag
            EmailAlreadyExistsError: If email is already registered
        """
        if not is_customer_registrations_enabled():
            raise RegistrationDisabledError

        normalized_email = email.strip().lower()
        if self.user_repository.find_by_email(
            normalized_email
        ) or self.customer_repository.find_by_email(normalized_email):
            raise EmailAlreadyExistsError(normalized_email)

        customer = Customer.create(
            customer_code=self.customer_repository.next_customer_code(datetime.now(UTC).date()),
            contact_person=contact_person,
            email=normalized_email,
            phone=phone,
            address_line_1=address_line_1,
            city=city,
            country=country,
            company_name=company_name,
            status=CustomerStatus.PENDING_APPROVAL,
        )
        customer = self.customer_repository.save(customer)

        user = User.create(
            email=normalized_email,
            name=contact_person,
            role=UserRole.CUSTOMER,
            customer_id=customer.id,
            hashed_password=self.password_service.hash_password(password),
        )
        user = self.user_repository.save(user)
        token_pair = self.token_service.create_token_pair(user.id.value)

        logger.info(
            "customer_registered",
            user_id=user.id.value,
            customer_id=customer.id.value,
            customer_code=customer.customer_code,
        )

        return user, token_pair
