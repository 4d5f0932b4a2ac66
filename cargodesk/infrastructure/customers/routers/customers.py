import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.customers.use_cases import CustomerManagementUseCase
from cargodesk.core import container
from cargodesk.domain.customers.entities.customer import CustomerStatus
from cargodesk.domain.customers.exceptions import CustomerNotFoundError
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.customers.schemas import (
    CustomerCreateRequest,
    CustomerResponse,
    CustomerUpdateRequest,
)
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("")
def list_customers(
    staff: StaffUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Code, company, contact or email"),
    customer_status: CustomerStatus | None = Query(None, alias="status"),
    country: str | None = None,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> PaginatedResponse[CustomerResponse]:
    result = use_case.list_customers(
        pagination, search=search, status=customer_status, country=country
    )
    return PaginatedResponse.from_result(result, CustomerResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_customer(
    staff: StaffUser,
    request: CustomerCreateRequest,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    """Create a customer. The customer code is assigned automatically."""
    customer = use_case.create_customer(created_by=staff.id.value, **request.model_dump())
    return CustomerResponse.from_domain(customer)


@router.get("/me")
def get_my_customer(
    current_user: CurrentUser,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    """Customer account linked to the signed-in customer user."""
    if current_user.customer_id is None:
        raise CustomerNotFoundError(0)
    return CustomerResponse.from_domain(use_case.get_customer(current_user.customer_id.value))


@router.get("/{customer_id}")
def get_customer(
    customer_id: int,
    staff: StaffUser,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    return CustomerResponse.from_domain(use_case.get_customer(customer_id))


@router.put("/{customer_id}")
def update_customer(
    customer_id: int,
    staff: StaffUser,
    request: CustomerUpdateRequest,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    """Update the provided fields only."""
    customer = use_case.update_customer(customer_id, **request.model_dump(exclude_unset=True))
    return CustomerResponse.from_domain(customer)


@router.post("/{customer_id}/approve")
def approve_customer(
    customer_id: int,
    staff: StaffUser,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    """Accept a self-registered customer."""
    customer = use_case.approve_customer(customer_id)
    logger.info(f"Customer {customer_id} approved by user {staff.id.value}")
    return CustomerResponse.from_domain(customer)


@router.post("/{customer_id}/reject")
def reject_customer(
    customer_id: int,
    staff: StaffUser,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> CustomerResponse:
    customer = use_case.reject_customer(customer_id)
    logger.info(f"Customer {customer_id} rejected by user {staff.id.value}")
    return CustomerResponse.from_domain(customer)


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    staff: StaffUser,
    use_case: CustomerManagementUseCase = Depends(
        inject_use_case(container.customer_management_use_case)
    ),
) -> SuccessResponse:
    use_case.delete_customer(customer_id)
    return SuccessResponse(success=True, message="Customer deleted")
