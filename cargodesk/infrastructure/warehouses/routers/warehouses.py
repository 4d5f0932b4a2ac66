import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.warehouses.use_cases import WarehouseManagementUseCase
from cargodesk.core import container
from cargodesk.domain.warehouses.entities.warehouse import WarehouseStatus
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser
from cargodesk.infrastructure.warehouses.schemas import (
    WarehouseCreateRequest,
    WarehouseDistanceResponse,
    WarehouseResponse,
    WarehouseStatusResponse,
    WarehouseUpdateRequest,
)
from cargodesk.utils import utc_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/warehouses", tags=["warehouses"])


@router.get("")
def list_warehouses(
    current_user: CurrentUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Code, name or city"),
    warehouse_status: WarehouseStatus | None = Query(None, alias="status"),
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> PaginatedResponse[WarehouseResponse]:
    """List warehouses. Any signed-in user may browse them to pick origins."""
    result = use_case.list_warehouses(pagination, search=search, status=warehouse_status)
    return PaginatedResponse.from_result(result, WarehouseResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_warehouse(
    staff: StaffUser,
    request: WarehouseCreateRequest,
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> WarehouseResponse:
    warehouse = use_case.create_warehouse(**request.model_dump())
    return WarehouseResponse.from_domain(warehouse)


@router.get("/{warehouse_id}")
def get_warehouse(
    warehouse_id: int,
    current_user: CurrentUser,
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> WarehouseResponse:
    return WarehouseResponse.from_domain(use_case.get_warehouse(warehouse_id))


@router.put("/{warehouse_id}")
def update_warehouse(
    warehouse_id: int,
    staff: StaffUser,
    request: WarehouseUpdateRequest,
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> WarehouseResponse:
    warehouse = use_case.update_warehouse(warehouse_id, **request.model_dump(exclude_unset=True))
    return WarehouseResponse.from_domain(warehouse)


@router.delete("/{warehouse_id}")
def delete_warehouse(
    warehouse_id: int,
    staff: StaffUser,
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> SuccessResponse:
    use_case.delete_warehouse(warehouse_id)
    logger.info(f"Warehouse {warehouse_id} deleted by user {staff.id.value}")
    return SuccessResponse(success=True, message="Warehouse deleted")


@router.get("/{warehouse_id}/operational")
def get_operational_status(
    warehouse_id: int,
    current_user: CurrentUser,
    at: datetime | None = Query(None, description="Moment to check (defaults to now)"),
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> WarehouseStatusResponse:
    """Whether the warehouse is open at the given moment (local wall-clock time)."""
    moment = at or utc_now()
    return WarehouseStatusResponse(
        warehouse_id=warehouse_id,
        at=moment,
        is_operational=use_case.is_operational(warehouse_id, moment),
    )


@router.get("/{warehouse_id}/distance/{other_id}")
def get_distance(
    warehouse_id: int,
    other_id: int,
    current_user: CurrentUser,
    use_case: WarehouseManagementUseCase = Depends(
        inject_use_case(container.warehouse_management_use_case)
    ),
) -> WarehouseDistanceResponse:
    return WarehouseDistanceResponse(
        from_warehouse_id=warehouse_id,
        to_warehouse_id=other_id,
        distance_km=use_case.distance_between(warehouse_id, other_id),
    )
