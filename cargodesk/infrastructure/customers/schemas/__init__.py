from cargodesk.infrastructure.customers.schemas.customer_schemas import (
    CustomerCreateRequest,
    CustomerResponse,
    CustomerUpdateRequest,
)

__all__ = ["CustomerCreateRequest", "CustomerResponse", "CustomerUpdateRequest"]
