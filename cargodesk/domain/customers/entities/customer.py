"""Customer entity."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import InvalidStatusTransitionError, ValidationError
from cargodesk.domain.common.value_objects.ids import CustomerId, UserId
from cargodesk.domain.common.value_objects.money import to_money


class CustomerStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING_APPROVAL = "pending_approval"


class PaymentTerms(StrEnum):
    NET_15 = "net_15"
    NET_30 = "net_30"
    NET_60 = "net_60"
    NET_90 = "net_90"
    CASH_ON_DELIVERY = "cash_on_delivery"

    @property
    def days(self) -> int:
        """Days between issue and due date for invoices on these terms."""
        if self is PaymentTerms.CASH_ON_DELIVERY:
            return 0
        return int(self.value.removeprefix("net_"))


@dataclass
class Customer(Entity[CustomerId]):
    """
    A customer account that ships goods and receives invoices.

    Business Rules:
    - Contact person, email, phone and the address basics are required
    - Credit limit cannot be negative
    - Self-registered customers wait in pending_approval until staff act
    """

    id: CustomerId
    customer_code: str
    contact_person: str
    email: str
    phone: str
    address_line_1: str
    city: str
    country: str
    company_name: str | None = None
    address_line_2: str | None = None
    state_province: str | None = None
    postal_code: str | None = None
    tax_number: str | None = None
    credit_limit: Decimal = Decimal("0.00")
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    status: CustomerStatus = CustomerStatus.ACTIVE
    notes: str | None = None
    created_by: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        for field_name in ("contact_person", "email", "phone", "address_line_1", "city", "country"):
            value = getattr(self, field_name)
            if not value or not str(value).strip():
                raise ValidationError(
                    f"{field_name.replace('_', ' ').capitalize()} cannot be empty",
                    field=field_name,
                )
        self.credit_limit = to_money(self.credit_limit)
        if self.credit_limit < 0:
            raise ValidationError(
                "Credit limit cannot be negative", field="credit_limit", value=self.credit_limit
            )

    @property
    def display_name(self) -> str:
        """Name shown in lists: the contact person, else the company."""
        return self.contact_person or self.company_name or self.customer_code

    @property
    def full_address(self) -> str:
        parts = [
            self.address_line_1,
            self.address_line_2,
            self.city,
            self.state_province,
            self.postal_code,
            self.country,
        ]
        return ", ".join(part for part in parts if part)

    def billing_address(self) -> dict[str, str | None]:
        """Address block copied onto invoices."""
        return {
            "name": self.company_name or self.contact_person,
            "contact_person": self.contact_person,
            "email": self.email,
            "phone": self.phone,
            "address_line_1": self.address_line_1,
            "address_line_2": self.address_line_2,
            "city": self.city,
            "state_province": self.state_province,
            "postal_code": self.postal_code,
            "country": self.country,
            "tax_number": self.tax_number,
        }

    @property
    def is_active(self) -> bool:
        return self.status == CustomerStatus.ACTIVE

    def approve(self) -> None:
        """Accept a pending registration."""
        if self.status != CustomerStatus.PENDING_APPROVAL:
            raise InvalidStatusTransitionError("customer", self.status, CustomerStatus.ACTIVE)
        self.status = CustomerStatus.ACTIVE

    def reject(self) -> None:
        """Turn down a pending registration."""
        if self.status != CustomerStatus.PENDING_APPROVAL:
            raise InvalidStatusTransitionError("customer", self.status, CustomerStatus.SUSPENDED)
        self.status = CustomerStatus.SUSPENDED

    def change_status(self, status: CustomerStatus) -> None:
        self.status = status

    def update_details(self, **changes: object) -> None:
        """
        Apply partial profile changes and re-validate.

        Raises:
            ValidationError: If a change leaves the customer invalid
        """
        for key, value in changes.items():
            if key in ("id", "customer_code", "status", "created_by", "created_at"):
                raise ValidationError(f"{key} cannot be changed", field=key)
            if not hasattr(self, key):
                raise ValidationError(f"Unknown customer field {key}", field=key)
            setattr(self, key, value)
        self.__post_init__()

    @classmethod
    def create(
        cls,
        customer_code: str,
        contact_person: str,
        email: str,
        phone: str,
        address_line_1: str,
        city: str,
        country: str,
        status: CustomerStatus = CustomerStatus.ACTIVE,
        created_by: UserId | None = None,
        **optional: object,
    ) -> "Customer":
        """Create a new customer (ID will be 0 until persisted)."""
        return cls(
            id=CustomerId.generate(),
            customer_code=customer_code,
            contact_person=contact_person.strip(),
            email=email.strip().lower(),
            phone=phone.strip(),
            address_line_1=address_line_1.strip(),
            city=city.strip(),
            country=country.strip(),
            status=status,
            created_by=created_by,
            **optional,  # type: ignore[arg-type]
        )
