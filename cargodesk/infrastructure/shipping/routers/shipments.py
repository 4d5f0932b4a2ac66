import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.shipping.use_cases import ShipmentManagementUseCase
from cargodesk.core import container
from cargodesk.domain.common.exceptions import ValidationError
from cargodesk.domain.shipping.entities.shipment import ServiceType, ShipmentStatus
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.identity.dependencies import CurrentUser, StaffUser, customer_scope
from cargodesk.infrastructure.shipping.schemas import (
    ShipmentCancelRequest,
    ShipmentCreateRequest,
    ShipmentResponse,
    ShipmentStatusUpdateRequest,
    ShipmentUpdateRequest,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/shipments", tags=["shipments"])


@router.get("")
def list_shipments(
    current_user: CurrentUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Tracking number, sender or recipient"),
    shipment_status: ShipmentStatus | None = Query(None, alias="status"),
    service_type: ServiceType | None = None,
    customer_id: int | None = Query(None, description="Staff only: one customer's shipments"),
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> PaginatedResponse[ShipmentResponse]:
    """List shipments. Customers only ever see their own."""
    scope = customer_scope(current_user)
    result = use_case.list_shipments(
        pagination,
        search=search,
        status=shipment_status,
        service_type=service_type,
        customer_id=scope if scope is not None else customer_id,
    )
    return PaginatedResponse.from_result(result, ShipmentResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_shipment(
    current_user: CurrentUser,
    request: ShipmentCreateRequest,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> ShipmentResponse:
    """
    Register a shipment and issue its tracking number.

    Customer users always ship for their own account and start at pending.
    Staff must name the customer and may enter a shipment that is already
    under way; its tracking history is then backfilled.
    """
    data = request.model_dump(exclude={"customer_id", "items", "initial_status"})
    if current_user.is_customer:
        customer_id = customer_scope(current_user)
        initial_status = ShipmentStatus.PENDING
    else:
        customer_id = request.customer_id
        initial_status = request.initial_status
    if customer_id is None:
        raise ValidationError("A customer is required", field="customer_id")

    shipment = use_case.create_shipment(
        customer_id=customer_id,
        created_by=current_user.id.value,
        initial_status=initial_status,
        items=[item.to_domain() for item in request.items],
        **data,
    )
    return ShipmentResponse.from_domain(shipment)


@router.get("/{shipment_id}")
def get_shipment(
    shipment_id: int,
    current_user: CurrentUser,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> ShipmentResponse:
    shipment = use_case.get_shipment(shipment_id, customer_scope(current_user))
    return ShipmentResponse.from_domain(shipment)


@router.put("/{shipment_id}")
def update_shipment(
    shipment_id: int,
    staff: StaffUser,
    request: ShipmentUpdateRequest,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> ShipmentResponse:
    shipment = use_case.update_shipment(shipment_id, **request.model_dump(exclude_unset=True))
    return ShipmentResponse.from_domain(shipment)


@router.post("/{shipment_id}/status")
def update_shipment_status(
    shipment_id: int,
    staff: StaffUser,
    request: ShipmentStatusUpdateRequest,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> ShipmentResponse:
    """Record a tracking update. The customer is notified of the new status."""
    shipment = use_case.update_status(
        shipment_id,
        status=request.status,
        location=request.location,
        notes=request.notes,
        recorded_by=staff.id.value,
        delivery_signature=request.delivery_signature,
    )
    return ShipmentResponse.from_domain(shipment)


@router.post("/{shipment_id}/cancel")
def cancel_shipment(
    shipment_id: int,
    current_user: CurrentUser,
    request: ShipmentCancelRequest,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> ShipmentResponse:
    """Cancel a pending or picked up shipment."""
    shipment = use_case.cancel_shipment(
        shipment_id,
        reason=request.reason,
        recorded_by=current_user.id.value,
        customer_id=customer_scope(current_user),
    )
    return ShipmentResponse.from_domain(shipment)


@router.delete("/{shipment_id}")
def delete_shipment(
    shipment_id: int,
    staff: StaffUser,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> SuccessResponse:
    use_case.delete_shipment(shipment_id)
    logger.info(f"Shipment {shipment_id} deleted by user {staff.id.value}")
    return SuccessResponse(success=True, message="Shipment deleted")
