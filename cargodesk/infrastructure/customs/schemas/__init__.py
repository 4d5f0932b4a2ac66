from cargodesk.infrastructure.customs.schemas.customs_schemas import (
    CustomsApproveRequest,
    CustomsClearRequest,
    CustomsDeclarationCreateRequest,
    CustomsDeclarationResponse,
    CustomsDeclarationUpdateRequest,
    CustomsItemRequest,
    CustomsItemResponse,
    CustomsRejectRequest,
    EstimatedChargesResponse,
)

__all__ = [
    "CustomsApproveRequest",
    "CustomsClearRequest",
    "CustomsDeclarationCreateRequest",
    "CustomsDeclarationResponse",
    "CustomsDeclarationUpdateRequest",
    "CustomsItemRequest",
    "CustomsItemResponse",
    "CustomsRejectRequest",
    "EstimatedChargesResponse",
]
