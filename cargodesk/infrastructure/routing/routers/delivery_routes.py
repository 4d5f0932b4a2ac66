import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.routing.use_cases import DeliveryRouteUseCase
from cargodesk.core import container
from cargodesk.domain.routing.entities.delivery_route import RouteStatus
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.identity.dependencies import StaffUser
from cargodesk.infrastructure.routing.schemas import (
    RouteCreateRequest,
    RouteResponse,
    StopCompleteRequest,
    StopFailRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("")
def list_routes(
    staff: StaffUser,
    pagination: PaginationParams,
    delivery_date: date | None = None,
    driver_id: int | None = None,
    warehouse_id: int | None = None,
    route_status: RouteStatus | None = Query(None, alias="status"),
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> PaginatedResponse[RouteResponse]:
    result = use_case.list_routes(
        pagination,
        delivery_date=delivery_date,
        driver_id=driver_id,
        warehouse_id=warehouse_id,
        status=route_status,
    )
    return PaginatedResponse.from_result(result, RouteResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_route(
    staff: StaffUser,
    request: RouteCreateRequest,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    """
    Plan a route for an active, available driver.

    Stops are numbered in the order given, timed 50 minutes apart from the
    planned start and measured from the warehouse.
    """
    data = request.model_dump(exclude={"stops"})
    route = use_case.create_route(
        stops=[stop.model_dump() for stop in request.stops],
        created_by=staff.id.value,
        **data,
    )
    return RouteResponse.from_domain(route)


@router.get("/{route_id}")
def get_route(
    route_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    return RouteResponse.from_domain(use_case.get_route(route_id))


@router.post("/{route_id}/start")
def start_route(
    route_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    return RouteResponse.from_domain(use_case.start_route(route_id))


@router.post("/{route_id}/optimize")
def optimize_route(
    route_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    """Reorder a planned route: urgent and high priority first, then nearest next."""
    return RouteResponse.from_domain(use_case.optimize_route(route_id))


@router.post("/{route_id}/cancel")
def cancel_route(
    route_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    return RouteResponse.from_domain(use_case.cancel_route(route_id))


@router.post("/{route_id}/stops/{stop_id}/arrive")
def arrive_at_stop(
    route_id: int,
    stop_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    return RouteResponse.from_domain(use_case.arrive_at_stop(route_id, stop_id))


@router.post("/{route_id}/stops/{stop_id}/complete")
def complete_stop(
    route_id: int,
    stop_id: int,
    staff: StaffUser,
    request: StopCompleteRequest,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    """Finish a stop. Delivery stops deliver their shipment."""
    route = use_case.complete_stop(
        route_id,
        stop_id,
        notes=request.notes,
        signature=request.signature,
        recorded_by=staff.id.value,
    )
    return RouteResponse.from_domain(route)


@router.post("/{route_id}/stops/{stop_id}/fail")
def fail_stop(
    route_id: int,
    stop_id: int,
    staff: StaffUser,
    request: StopFailRequest,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> RouteResponse:
    route = use_case.fail_stop(route_id, stop_id, request.reason, recorded_by=staff.id.value)
    logger.info(f"Stop {stop_id} on route {route.route_number} failed: {request.reason}")
    return RouteResponse.from_domain(route)


@router.delete("/{route_id}")
def delete_route(
    route_id: int,
    staff: StaffUser,
    use_case: DeliveryRouteUseCase = Depends(inject_use_case(container.delivery_route_use_case)),
) -> SuccessResponse:
    use_case.delete_route(route_id)
    return SuccessResponse(success=True, message="Route deleted")
