"""Customs declaration aggregate."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import StrEnum
from typing import Any

from cargodesk.domain.common.aggregate_root import AggregateRoot
from cargodesk.domain.common.entity import Entity
from cargodesk.domain.common.exceptions import (
    BusinessRuleViolationError,
    InvalidStatusTransitionError,
    ValidationError,
)
from cargodesk.domain.common.value_objects.ids import (
    CustomsDeclarationId,
    CustomsItemId,
    ShipmentId,
    UserId,
)
from cargodesk.domain.common.value_objects.money import HUNDRED, ZERO, percent_of, to_money

CERTIFICATE_OF_ORIGIN_THRESHOLD = Decimal(2500)
EXPORT_LICENSE_THRESHOLD = Decimal(1000)
COUNTRY_CODE_LENGTH = 3


class DeclarationStatus(StrEnum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    PROCESSING = "processing"
    APPROVED = "approved"
    REJECTED = "rejected"
    CLEARED = "cleared"


class DeclarationType(StrEnum):
    EXPORT = "export"
    IMPORT = "import"
    TRANSIT = "transit"


class CustomsShipmentType(StrEnum):
    COMMERCIAL = "commercial"
    GIFT = "gift"
    SAMPLE = "sample"
    RETURN = "return"
    PERSONAL = "personal"


def _country_code(value: str, field_name: str) -> str:
    code = (value or "").strip().upper()
    if len(code) != COUNTRY_CODE_LENGTH or not code.isalpha():
        raise ValidationError(
            "Country must be an ISO 3166-1 alpha-3 code", field=field_name, value=value
        )
    return code


@dataclass
class CustomsItem(Entity[CustomsItemId]):
    """A goods line with its value and estimated duty and tax."""

    id: CustomsItemId
    description: str
    country_of_origin: str
    quantity: int
    unit_weight: Decimal
    unit_value: Decimal
    hs_code: str | None = None
    estimated_duty_rate: Decimal = ZERO
    estimated_tax_rate: Decimal = ZERO
    total_value: Decimal = ZERO
    estimated_duty_amount: Decimal = ZERO
    estimated_tax_amount: Decimal = ZERO

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Item description cannot be empty", field="description")
        if self.quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity")
        if self.unit_weight < 0 or self.unit_value < 0:
            raise ValidationError("Unit weight and value cannot be negative", field="items")
        for rate_field in ("estimated_duty_rate", "estimated_tax_rate"):
            rate = Decimal(getattr(self, rate_field))
            if rate < 0 or rate > HUNDRED:
                raise ValidationError(f"{rate_field} must be between 0 and 100", field=rate_field)
        self.country_of_origin = _country_code(self.country_of_origin, "country_of_origin")
        self.unit_value = to_money(self.unit_value)
        self.calculate()

    def calculate(self) -> None:
        """Total value is quantity x unit value; duty and tax are percentages of it."""
        self.total_value = to_money(self.quantity * self.unit_value)
        self.estimated_duty_amount = percent_of(self.total_value, self.estimated_duty_rate)
        self.estimated_tax_amount = percent_of(self.total_value, self.estimated_tax_rate)

    @property
    def total_weight(self) -> Decimal:
        return Decimal(self.unit_weight) * self.quantity

    @classmethod
    def create(
        cls,
        description: str,
        country_of_origin: str,
        quantity: int,
        unit_weight: Decimal,
        unit_value: Decimal,
        **optional: Any,  # noqa: ANN401
    ) -> "CustomsItem":
        return cls(
            id=CustomsItemId.generate(),
            description=description.strip(),
            country_of_origin=country_of_origin,
            quantity=quantity,
            unit_weight=unit_weight,
            unit_value=unit_value,
            **optional,
        )


@dataclass
class CustomsDeclaration(AggregateRoot[CustomsDeclarationId]):
    """
    Customs paperwork for a shipment that crosses a border.

    Status flow:
        draft -> submitted -> processing -> approved -> cleared
                     \\-> rejected (may be corrected and resubmitted)

    Business Rules:
    - Items can only be changed while draft or rejected
    - Only complete declarations can be submitted
    - Rejection requires a reason
    """

    id: CustomsDeclarationId
    declaration_number: str
    shipment_id: ShipmentId
    origin_country: str
    destination_country: str
    description_of_goods: str
    currency: str
    exporter_details: dict[str, Any] = field(default_factory=dict)
    importer_details: dict[str, Any] = field(default_factory=dict)
    declaration_type: DeclarationType = DeclarationType.EXPORT
    shipment_type: CustomsShipmentType = CustomsShipmentType.COMMERCIAL
    incoterms: str | None = None
    total_value: Decimal = ZERO
    insurance_value: Decimal = ZERO
    freight_charges: Decimal = ZERO
    estimated_duties: Decimal = ZERO
    estimated_taxes: Decimal = ZERO
    reason_for_export: str | None = None
    contains_batteries: bool = False
    contains_liquids: bool = False
    contains_dangerous_goods: bool = False
    status: DeclarationStatus = DeclarationStatus.DRAFT
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    cleared_at: datetime | None = None
    rejection_reason: str | None = None
    customs_response: str | None = None
    customs_reference: str | None = None
    created_by: UserId | None = None
    items: list[CustomsItem] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.origin_country = _country_code(self.origin_country, "origin_country")
        self.destination_country = _country_code(self.destination_country, "destination_country")
        self.insurance_value = to_money(self.insurance_value)
        self.freight_charges = to_money(self.freight_charges)
        self.total_value = to_money(self.total_value)
        if self.insurance_value < 0 or self.freight_charges < 0 or self.total_value < 0:
            raise ValidationError("Declared amounts cannot be negative")

    @property
    def is_editable(self) -> bool:
        return self.status in (DeclarationStatus.DRAFT, DeclarationStatus.REJECTED)

    def replace_items(self, items: list[CustomsItem]) -> None:
        """
        Swap the goods lines and refresh the totals and estimates.

        Raises:
            BusinessRuleViolationError: If the declaration is already with customs
        """
        if not self.is_editable:
            raise BusinessRuleViolationError(
                "editable_declaration",
                f"Cannot change items of a {self.status} declaration",
            )
        self.items = items
        if items:
            self.total_value = to_money(sum((item.total_value for item in items), ZERO))
        self.calculate_estimated_charges()

    def update_details(self, **changes: Any) -> None:  # noqa: ANN401
        if not self.is_editable:
            raise BusinessRuleViolationError(
                "editable_declaration", f"Cannot edit a {self.status} declaration"
            )
        for key, value in changes.items():
            if key in ("id", "declaration_number", "shipment_id", "status", "items"):
                raise ValidationError(f"{key} cannot be changed", field=key)
            setattr(self, key, value)
        self.__post_init__()

    def calculate_estimated_charges(self) -> dict[str, Decimal]:
        """Sum item duties and taxes onto the declaration."""
        self.estimated_duties = to_money(
            sum((item.estimated_duty_amount for item in self.items), ZERO)
        )
        self.estimated_taxes = to_money(
            sum((item.estimated_tax_amount for item in self.items), ZERO)
        )
        return {
            "duties": self.estimated_duties,
            "taxes": self.estimated_taxes,
            "total": to_money(self.estimated_duties + self.estimated_taxes),
        }

    def required_documents(self) -> list[str]:
        """Supporting documents customs will ask for."""
        required = ["commercial_invoice", "packing_list"]
        if self.total_value > CERTIFICATE_OF_ORIGIN_THRESHOLD:
            required.append("certificate_of_origin")
        if self.contains_dangerous_goods:
            required.append("dangerous_goods_declaration")
        if (
            self.shipment_type == CustomsShipmentType.COMMERCIAL
            and self.total_value > EXPORT_LICENSE_THRESHOLD
        ):
            required.append("export_license")
        return required

    def missing_fields(self) -> list[str]:
        missing = [
            name
            for name in (
                "origin_country",
                "destination_country",
                "declaration_type",
                "description_of_goods",
                "exporter_details",
                "importer_details",
            )
            if not getattr(self, name)
        ]
        if self.total_value <= 0:
            missing.append("total_value")
        if not self.items:
            missing.append("items")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()

    # Status transitions

    def submit(self, at: datetime | None = None) -> None:
        """
        Send the declaration to customs.

        Raises:
            InvalidStatusTransitionError: If not draft or rejected
            BusinessRuleViolationError: If required data is missing
        """
        if not self.is_editable:
            raise InvalidStatusTransitionError(
                "customs declaration", self.status, DeclarationStatus.SUBMITTED
            )
        missing = self.missing_fields()
        if missing:
            raise BusinessRuleViolationError(
                "complete_declaration",
                f"Declaration is incomplete, missing: {', '.join(missing)}",
            )
        self.status = DeclarationStatus.SUBMITTED
        self.submitted_at = at or datetime.now(UTC)
        self.rejection_reason = None

    def start_processing(self) -> None:
        self._require(DeclarationStatus.PROCESSING, DeclarationStatus.SUBMITTED)
        self.status = DeclarationStatus.PROCESSING

    def approve(self, customs_response: str | None = None, at: datetime | None = None) -> None:
        self._require(
            DeclarationStatus.APPROVED, DeclarationStatus.SUBMITTED, DeclarationStatus.PROCESSING
        )
        self.status = DeclarationStatus.APPROVED
        self.approved_at = at or datetime.now(UTC)
        self.customs_response = customs_response

    def reject(self, reason: str) -> None:
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required", field="reason")
        self._require(
            DeclarationStatus.REJECTED, DeclarationStatus.SUBMITTED, DeclarationStatus.PROCESSING
        )
        self.status = DeclarationStatus.REJECTED
        self.rejection_reason = reason.strip()

    def clear(self, customs_reference: str | None = None, at: datetime | None = None) -> None:
        self._require(DeclarationStatus.CLEARED, DeclarationStatus.APPROVED)
        self.status = DeclarationStatus.CLEARED
        self.cleared_at = at or datetime.now(UTC)
        if customs_reference:
            self.customs_reference = customs_reference

    def _require(self, target: DeclarationStatus, *allowed: DeclarationStatus) -> None:
        if self.status not in allowed:
            raise InvalidStatusTransitionError("customs declaration", self.status, target)

    @classmethod
    def create(
        cls,
        declaration_number: str,
        shipment_id: ShipmentId,
        origin_country: str,
        destination_country: str,
        description_of_goods: str,
        currency: str,
        items: list[CustomsItem] | None = None,
        **optional: Any,  # noqa: ANN401
    ) -> "CustomsDeclaration":
        """Create a draft declaration (ID will be 0 until persisted)."""
        declaration = cls(
            id=CustomsDeclarationId.generate(),
            declaration_number=declaration_number,
            shipment_id=shipment_id,
            origin_country=origin_country,
            destination_country=destination_country,
            description_of_goods=description_of_goods.strip(),
            currency=currency.upper(),
            **optional,
        )
        declaration.replace_items(items or [])
        return declaration
