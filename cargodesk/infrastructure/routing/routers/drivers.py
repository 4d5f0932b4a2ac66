import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.routing.use_cases import DriverManagementUseCase
from cargodesk.core import container
from cargodesk.domain.routing.entities.driver import DriverStatus
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.identity.dependencies import StaffUser
from cargodesk.infrastructure.routing.schemas import (
    DriverAvailabilityRequest,
    DriverCreateRequest,
    DriverLocationRequest,
    DriverResponse,
    DriverUpdateRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.get("")
def list_drivers(
    staff: StaffUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Code, name, email or plate"),
    driver_status: DriverStatus | None = Query(None, alias="status"),
    available: bool | None = None,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> PaginatedResponse[DriverResponse]:
    result = use_case.list_drivers(
        pagination, search=search, status=driver_status, available=available
    )
    return PaginatedResponse.from_result(result, DriverResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_driver(
    staff: StaffUser,
    request: DriverCreateRequest,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> DriverResponse:
    return DriverResponse.from_domain(use_case.create_driver(**request.model_dump()))


@router.get("/{driver_id}")
def get_driver(
    driver_id: int,
    staff: StaffUser,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> DriverResponse:
    return DriverResponse.from_domain(use_case.get_driver(driver_id))


@router.put("/{driver_id}")
def update_driver(
    driver_id: int,
    staff: StaffUser,
    request: DriverUpdateRequest,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> DriverResponse:
    driver = use_case.update_driver(driver_id, **request.model_dump(exclude_unset=True))
    return DriverResponse.from_domain(driver)


@router.post("/{driver_id}/location")
def update_driver_location(
    driver_id: int,
    staff: StaffUser,
    request: DriverLocationRequest,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> DriverResponse:
    driver = use_case.update_location(driver_id, request.latitude, request.longitude)
    return DriverResponse.from_domain(driver)


@router.post("/{driver_id}/availability")
def set_driver_availability(
    driver_id: int,
    staff: StaffUser,
    request: DriverAvailabilityRequest,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> DriverResponse:
    driver = use_case.set_availability(driver_id, request.is_available)
    return DriverResponse.from_domain(driver)


@router.delete("/{driver_id}")
def delete_driver(
    driver_id: int,
    staff: StaffUser,
    use_case: DriverManagementUseCase = Depends(
        inject_use_case(container.driver_management_use_case)
    ),
) -> SuccessResponse:
    use_case.delete_driver(driver_id)
    return SuccessResponse(success=True, message="Driver deleted")
