"""Mapper for Customer ORM ↔ Domain conversion."""

from cargodesk.domain.common.value_objects.ids import CustomerId, UserId
from cargodesk.domain.customers.entities.customer import Customer, CustomerStatus, PaymentTerms
from cargodesk.models import Customer as CustomerORM
from cargodesk.utils import ensure_utc

_PROFILE_FIELDS = (
    "company_name",
    "contact_person",
    "email",
    "phone",
    "address_line_1",
    "address_line_2",
    "city",
    "state_province",
    "postal_code",
    "country",
    "tax_number",
    "credit_limit",
    "notes",
)


class CustomerMapper:
    def to_domain(self, orm_model: CustomerORM) -> Customer:
        return Customer(
            id=CustomerId(orm_model.id),
            customer_code=orm_model.customer_code,
            company_name=orm_model.company_name,
            contact_person=orm_model.contact_person,
            email=orm_model.email,
            phone=orm_model.phone,
            address_line_1=orm_model.address_line_1,
            address_line_2=orm_model.address_line_2,
            city=orm_model.city,
            state_province=orm_model.state_province,
            postal_code=orm_model.postal_code,
            country=orm_model.country,
            tax_number=orm_model.tax_number,
            credit_limit=orm_model.credit_limit,
            payment_terms=PaymentTerms(orm_model.payment_terms),
            status=CustomerStatus(orm_model.status),
            notes=orm_model.notes,
            created_by=UserId(orm_model.created_by) if orm_model.created_by else None,
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
        )

    def to_orm(self, domain_entity: Customer, orm_model: CustomerORM | None = None) -> CustomerORM:
        if orm_model is None:
            orm_model = CustomerORM(
                customer_code=domain_entity.customer_code,
                created_by=domain_entity.created_by.value if domain_entity.created_by else None,
            )
        for name in _PROFILE_FIELDS:
            setattr(orm_model, name, getattr(domain_entity, name))
        orm_model.payment_terms = domain_entity.payment_terms
        orm_model.status = domain_entity.status
        return orm_model
