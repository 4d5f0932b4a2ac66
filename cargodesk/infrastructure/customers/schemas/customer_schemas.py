from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field

from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus, PaymentTerms


class CustomerBase(BaseModel):
    company_name: str | None = Field(None, max_length=255, description="Company name")
    contact_person: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)
    address_line_1: str = Field(..., min_length=1, max_length=255)
    address_line_2: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state_province: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    tax_number: str | None = Field(None, max_length=50)
    credit_limit: Decimal = Field(Decimal("0"), ge=0, description="Credit limit")
    payment_terms: PaymentTerms = PaymentTerms.NET_30
    notes: str | None = None


class CustomerCreateRequest(CustomerBase):
    """Schema for staff creating a customer."""

    status: CustomerStatus = CustomerStatus.ACTIVE


class CustomerUpdateRequest(BaseModel):
    """Schema for a partial customer update. Only provided fields change."""

    company_name: str | None = Field(None, max_length=255)
    contact_person: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, min_length=1, max_length=30)
    address_line_1: str | None = Field(None, min_length=1, max_length=255)
    address_line_2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state_province: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)
    tax_number: str | None = Field(None, max_length=50)
    credit_limit: Decimal | None = Field(None, ge=0)
    payment_terms: PaymentTerms | None = None
    status: CustomerStatus | None = None
    notes: str | None = None


class CustomerResponse(CustomerBase):
    """Schema for customer response."""

    id: int
    customer_code: str
    status: CustomerStatus
    display_name: str
    full_address: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerResponse":
        return cls(
            id=customer.id.value,
            customer_code=customer.customer_code,
            company_name=customer.company_name,
            contact_person=customer.contact_person,
            email=customer.email,
            phone=customer.phone,
            address_line_1=customer.address_line_1,
            address_line_2=customer.address_line_2,
            city=customer.city,
            state_province=customer.state_province,
            postal_code=customer.postal_code,
            country=customer.country,
            tax_number=customer.tax_number,
            credit_limit=customer.credit_limit,
            payment_terms=customer.payment_terms,
            status=customer.status,
            notes=customer.notes,
            display_name=customer.display_name,
            full_address=customer.full_address,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )
