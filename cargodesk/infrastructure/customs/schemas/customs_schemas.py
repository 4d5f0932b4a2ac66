from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from cargodesk.domain.customs.entities.customs_declaration import (
    CustomsDeclaration,
    CustomsItem,
    CustomsShipmentType,
    DeclarationStatus,
    DeclarationType,
)


class CustomsItemRequest(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)
    hs_code: str | None = Field(None, max_length=20, description="Harmonized System code")
    country_of_origin: str = Field(..., min_length=3, max_length=3, description="ISO alpha-3")
    quantity: int = Field(..., ge=1)
    unit_weight: Decimal = Field(..., ge=0)
    unit_value: Decimal = Field(..., ge=0)
    estimated_duty_rate: Decimal = Field(Decimal("0"), ge=0, le=100)
    estimated_tax_rate: Decimal = Field(Decimal("0"), ge=0, le=100)


class CustomsDeclarationCreateRequest(BaseModel):
    shipment_id: int
    origin_country: str = Field(..., min_length=3, max_length=3)
    destination_country: str = Field(..., min_length=3, max_length=3)
    description_of_goods: str = Field(..., min_length=1)
    currency: str | None = Field(None, min_length=3, max_length=3)
    declaration_type: DeclarationType = DeclarationType.EXPORT
    shipment_type: CustomsShipmentType = CustomsShipmentType.COMMERCIAL
    incoterms: str | None = Field(None, max_length=10)
    insurance_value: Decimal = Field(Decimal("0"), ge=0)
    freight_charges: Decimal = Field(Decimal("0"), ge=0)
    reason_for_export: str | None = Field(None, max_length=255)
    contains_batteries: bool = False
    contains_liquids: bool = False
    contains_dangerous_goods: bool = False
    exporter_details: dict[str, Any] = Field(default_factory=dict)
    importer_details: dict[str, Any] = Field(default_factory=dict)
    items: list[CustomsItemRequest] = Field(default_factory=list)


class CustomsDeclarationUpdateRequest(BaseModel):
    """Partial update of a draft or rejected declaration. Items, when sent, replace all."""

    origin_country: str | None = Field(None, min_length=3, max_length=3)
    destination_country: str | None = Field(None, min_length=3, max_length=3)
    description_of_goods: str | None = Field(None, min_length=1)
    declaration_type: DeclarationType | None = None
    shipment_type: CustomsShipmentType | None = None
    incoterms: str | None = Field(None, max_length=10)
    insurance_value: Decimal | None = Field(None, ge=0)
    freight_charges: Decimal | None = Field(None, ge=0)
    reason_for_export: str | None = Field(None, max_length=255)
    contains_batteries: bool | None = None
    contains_liquids: bool | None = None
    contains_dangerous_goods: bool | None = None
    exporter_details: dict[str, Any] | None = None
    importer_details: dict[str, Any] | None = None
    items: list[CustomsItemRequest] | None = None


class CustomsApproveRequest(BaseModel):
    customs_response: str | None = None


class CustomsRejectRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class CustomsClearRequest(BaseModel):
    customs_reference: str | None = Field(None, max_length=100)


class CustomsItemResponse(BaseModel):
    id: int
    description: str
    hs_code: str | None
    country_of_origin: str
    quantity: int
    unit_weight: Decimal
    unit_value: Decimal
    total_value: Decimal
    estimated_duty_rate: Decimal
    estimated_duty_amount: Decimal
    estimated_tax_rate: Decimal
    estimated_tax_amount: Decimal

    @classmethod
    def from_domain(cls, item: CustomsItem) -> "CustomsItemResponse":
        return cls(
            id=item.id.value,
            description=item.description,
            hs_code=item.hs_code,
            country_of_origin=item.country_of_origin,
            quantity=item.quantity,
            unit_weight=item.unit_weight,
            unit_value=item.unit_value,
            total_value=item.total_value,
            estimated_duty_rate=item.estimated_duty_rate,
            estimated_duty_amount=item.estimated_duty_amount,
            estimated_tax_rate=item.estimated_tax_rate,
            estimated_tax_amount=item.estimated_tax_amount,
        )


class CustomsDeclarationResponse(BaseModel):
    id: int
    declaration_number: str
    shipment_id: int
    origin_country: str
    destination_country: str
    declaration_type: DeclarationType
    shipment_type: CustomsShipmentType
    incoterms: str | None
    currency: str
    total_value: Decimal
    insurance_value: Decimal
    freight_charges: Decimal
    estimated_duties: Decimal
    estimated_taxes: Decimal
    description_of_goods: str
    reason_for_export: str | None
    contains_batteries: bool
    contains_liquids: bool
    contains_dangerous_goods: bool
    exporter_details: dict[str, Any]
    importer_details: dict[str, Any]
    status: DeclarationStatus
    submitted_at: datetime | None
    approved_at: datetime | None
    cleared_at: datetime | None
    rejection_reason: str | None
    customs_response: str | None
    customs_reference: str | None
    is_complete: bool
    missing_fields: list[str]
    required_documents: list[str]
    items: list[CustomsItemResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, declaration: CustomsDeclaration) -> "CustomsDeclarationResponse":
        return cls(
            id=declaration.id.value,
            declaration_number=declaration.declaration_number,
            shipment_id=declaration.shipment_id.value,
            origin_country=declaration.origin_country,
            destination_country=declaration.destination_country,
            declaration_type=declaration.declaration_type,
            shipment_type=declaration.shipment_type,
            incoterms=declaration.incoterms,
            currency=declaration.currency,
            total_value=declaration.total_value,
            insurance_value=declaration.insurance_value,
            freight_charges=declaration.freight_charges,
            estimated_duties=declaration.estimated_duties,
            estimated_taxes=declaration.estimated_taxes,
            description_of_goods=declaration.description_of_goods,
            reason_for_export=declaration.reason_for_export,
            contains_batteries=declaration.contains_batteries,
            contains_liquids=declaration.contains_liquids,
            contains_dangerous_goods=declaration.contains_dangerous_goods,
            exporter_details=declaration.exporter_details,
            importer_details=declaration.importer_details,
            status=declaration.status,
            submitted_at=declaration.submitted_at,
            approved_at=declaration.approved_at,
            cleared_at=declaration.cleared_at,
            rejection_reason=declaration.rejection_reason,
            customs_response=declaration.customs_response,
            customs_reference=declaration.customs_reference,
            is_complete=declaration.is_complete(),
            missing_fields=declaration.missing_fields(),
            required_documents=declaration.required_documents(),
            items=[CustomsItemResponse.from_domain(item) for item in declaration.items],
            created_at=declaration.created_at,
            updated_at=declaration.updated_at,
        )


class EstimatedChargesResponse(BaseModel):
    currency: str
    duties: Decimal
    taxes: Decimal
    total: Decimal
