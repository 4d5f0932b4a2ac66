from fastapi import APIRouter, Depends

from cargodesk.application.shipping.use_cases import ShipmentManagementUseCase
from cargodesk.core import container
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.shipping.schemas import PublicTrackingResponse

router = APIRouter(prefix="/tracking", tags=["tracking"])


@router.get("/{tracking_number}")
def track_shipment(
    tracking_number: str,
    use_case: ShipmentManagementUseCase = Depends(
        inject_use_case(container.shipment_management_use_case)
    ),
) -> PublicTrackingResponse:
    """
    Public tracking lookup.

    No authentication: returns only the status, dates, recipient name and
    the tracking history (newest first).
    """
    return PublicTrackingResponse.from_domain(use_case.track(tracking_number))
