import logging

from fastapi import APIRouter, Depends, Query, status

from cargodesk.application.customs.use_cases import CustomsDeclarationUseCase
from cargodesk.core import container
from cargodesk.domain.customs.entities.customs_declaration import (
    DeclarationStatus,
    DeclarationType,
)
from cargodesk.infrastructure.common.di import inject_use_case
from cargodesk.infrastructure.common.pagination import PaginationParams
from cargodesk.infrastructure.common.schemas import PaginatedResponse, SuccessResponse
from cargodesk.infrastructure.customs.schemas import (
    CustomsApproveRequest,
    CustomsClearRequest,
    CustomsDeclarationCreateRequest,
    CustomsDeclarationResponse,
    CustomsDeclarationUpdateRequest,
    CustomsRejectRequest,
    EstimatedChargesResponse,
)
from cargodesk.infrastructure.identity.dependencies import StaffUser

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/customs-declarations", tags=["customs"])


@router.get("")
def list_declarations(
    staff: StaffUser,
    pagination: PaginationParams,
    search: str | None = Query(None, description="Declaration number, goods or tracking number"),
    declaration_status: DeclarationStatus | None = Query(None, alias="status"),
    declaration_type: DeclarationType | None = None,
    shipment_id: int | None = None,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> PaginatedResponse[CustomsDeclarationResponse]:
    result = use_case.list_declarations(
        pagination,
        search=search,
        status=declaration_status,
        declaration_type=declaration_type,
        shipment_id=shipment_id,
    )
    return PaginatedResponse.from_result(result, CustomsDeclarationResponse.from_domain)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_declaration(
    staff: StaffUser,
    request: CustomsDeclarationCreateRequest,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    """Draft a declaration. Totals and estimates are derived from the items."""
    data = request.model_dump(exclude={"items"}, exclude_none=True)
    declaration = use_case.create_declaration(
        items=[item.model_dump() for item in request.items],
        created_by=staff.id.value,
        **data,
    )
    return CustomsDeclarationResponse.from_domain(declaration)


@router.get("/{declaration_id}")
def get_declaration(
    declaration_id: int,
    staff: StaffUser,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    return CustomsDeclarationResponse.from_domain(use_case.get_declaration(declaration_id))


@router.get("/{declaration_id}/estimated-charges")
def get_estimated_charges(
    declaration_id: int,
    staff: StaffUser,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> EstimatedChargesResponse:
    declaration = use_case.get_declaration(declaration_id)
    charges = declaration.calculate_estimated_charges()
    return EstimatedChargesResponse(currency=declaration.currency, **charges)


@router.put("/{declaration_id}")
def update_declaration(
    declaration_id: int,
    staff: StaffUser,
    request: CustomsDeclarationUpdateRequest,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    changes = request.model_dump(exclude_unset=True, exclude={"items"})
    items = (
        [item.model_dump() for item in request.items] if request.items is not None else None
    )
    declaration = use_case.update_declaration(declaration_id, items=items, **changes)
    return CustomsDeclarationResponse.from_domain(declaration)


@router.post("/{declaration_id}/submit")
def submit_declaration(
    declaration_id: int,
    staff: StaffUser,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    """Send a complete draft or corrected declaration to customs."""
    return CustomsDeclarationResponse.from_domain(use_case.submit(declaration_id))


@router.post("/{declaration_id}/processing")
def start_processing(
    declaration_id: int,
    staff: StaffUser,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    return CustomsDeclarationResponse.from_domain(use_case.start_processing(declaration_id))


@router.post("/{declaration_id}/approve")
def approve_declaration(
    declaration_id: int,
    staff: StaffUser,
    request: CustomsApproveRequest,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    declaration = use_case.approve(declaration_id, request.customs_response)
    return CustomsDeclarationResponse.from_domain(declaration)


@router.post("/{declaration_id}/reject")
def reject_declaration(
    declaration_id: int,
    staff: StaffUser,
    request: CustomsRejectRequest,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    declaration = use_case.reject(declaration_id, request.reason)
    return CustomsDeclarationResponse.from_domain(declaration)


@router.post("/{declaration_id}/clear")
def clear_declaration(
    declaration_id: int,
    staff: StaffUser,
    request: CustomsClearRequest,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> CustomsDeclarationResponse:
    declaration = use_case.clear(declaration_id, request.customs_reference)
    return CustomsDeclarationResponse.from_domain(declaration)


@router.delete("/{declaration_id}")
def delete_declaration(
    declaration_id: int,
    staff: StaffUser,
    use_case: CustomsDeclarationUseCase = Depends(
        inject_use_case(container.customs_declaration_use_case)
    ),
) -> SuccessResponse:
    use_case.delete_declaration(declaration_id)
    return SuccessResponse(success=True, message="Customs declaration deleted")
