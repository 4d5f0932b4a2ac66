"""
Customs declaration use case.

Prepares declarations for cross-border shipments and records the answers
customs gives back.
"""

from datetime import UTC, datetime
from typing import Any

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.customs.protocols.customs_declaration_repository import (
    CustomsDeclarationRepositoryProtocol,
)
from cargodesk.application.shipping.protocols.shipment_repository import (
    ShipmentRepositoryProtocol,
)
from cargodesk.domain.common.exceptions import BusinessRuleViolationError
from cargodesk.domain.common.value_objects.ids import CustomsDeclarationId, ShipmentId, UserId
from cargodesk.domain.customs.entities.customs_declaration import (
    CustomsDeclaration,
    CustomsItem,
    DeclarationStatus,
    DeclarationType,
)
from cargodesk.domain.customs.exceptions import CustomsDeclarationNotFoundError
from cargodesk.domain.shipping.exceptions import ShipmentNotFoundError

logger = structlog.get_logger(__name__)


class CustomsDeclarationUseCase:
    """Use case for customs declaration operations."""

    def __init__(
        self,
        declaration_repository: CustomsDeclarationRepositoryProtocol,
        shipment_repository: ShipmentRepositoryProtocol,
        default_currency: str,
    ) -> None:
        self.declaration_repository = declaration_repository
        self.shipment_repository = shipment_repository
        self.default_currency = default_currency

    def create_declaration(
        self,
        shipment_id: int,
        origin_country: str,
        destination_country: str,
        description_of_goods: str,
        items: list[dict[str, Any]],
        currency: str | None = None,
        created_by: int | None = None,
        **optional: Any,  # noqa: ANN401
    ) -> CustomsDeclaration:
        """
        Create a draft declaration for a shipment.

        Raises:
            ShipmentNotFoundError: If shipment is not found
        """
        shipment = self.shipment_repository.find_by_id(ShipmentId(shipment_id))
        if not shipment:
            raise ShipmentNotFoundError(shipment_id)

        declaration = CustomsDeclaration.create(
            declaration_number=self.declaration_repository.next_declaration_number(
                datetime.now(UTC).date()
            ),
            shipment_id=shipment.id,
            origin_country=origin_country,
            destination_country=destination_country,
            description_of_goods=description_of_goods,
            currency=currency or self.default_currency,
            items=self._build_items(items),
            created_by=UserId(created_by) if created_by else None,
            **optional,
        )
        declaration = self.declaration_repository.save(declaration)

        logger.info(
            "customs_declaration_created",
            declaration_id=declaration.id.value,
            declaration_number=declaration.declaration_number,
            shipment_id=shipment_id,
            total_value=str(declaration.total_value),
        )
        return declaration

    def get_declaration(self, declaration_id: int) -> CustomsDeclaration:
        declaration = self.declaration_repository.find_by_id(CustomsDeclarationId(declaration_id))
        if not declaration:
            raise CustomsDeclarationNotFoundError(declaration_id)
        return declaration

    def list_declarations(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DeclarationStatus | None = None,
        declaration_type: DeclarationType | None = None,
        shipment_id: int | None = None,
    ) -> PaginatedResult[CustomsDeclaration]:
        items, total = self.declaration_repository.search(
            pagination,
            search=search,
            status=status,
            declaration_type=declaration_type,
            shipment_id=ShipmentId(shipment_id) if shipment_id else None,
        )
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def update_declaration(
        self,
        declaration_id: int,
        items: list[dict[str, Any]] | None = None,
        **changes: Any,  # noqa: ANN401
    ) -> CustomsDeclaration:
        """
        Edit a draft or rejected declaration.

        Raises:
            CustomsDeclarationNotFoundError: If declaration is not found
            BusinessRuleViolationError: If the declaration is with customs
        """
        declaration = self.get_declaration(declaration_id)
        declaration.update_details(**changes)
        if items is not None:
            declaration.replace_items(self._build_items(items))
        else:
            declaration.calculate_estimated_charges()
        declaration = self.declaration_repository.save(declaration)

        logger.info(
            "customs_declaration_updated",
            declaration_id=declaration_id,
            fields=sorted(changes),
            items_replaced=items is not None,
        )
        return declaration

    def submit(self, declaration_id: int) -> CustomsDeclaration:
        declaration = self.get_declaration(declaration_id)
        declaration.submit()
        return self._save_transition(declaration)

    def start_processing(self, declaration_id: int) -> CustomsDeclaration:
        declaration = self.get_declaration(declaration_id)
        declaration.start_processing()
        return self._save_transition(declaration)

    def approve(
        self, declaration_id: int, customs_response: str | None = None
    ) -> CustomsDeclaration:
        declaration = self.get_declaration(declaration_id)
        declaration.approve(customs_response)
        return self._save_transition(declaration)

    def reject(self, declaration_id: int, reason: str) -> CustomsDeclaration:
        declaration = self.get_declaration(declaration_id)
        declaration.reject(reason)
        return self._save_transition(declaration)

    def clear(
        self, declaration_id: int, customs_reference: str | None = None
    ) -> CustomsDeclaration:
        declaration = self.get_declaration(declaration_id)
        declaration.clear(customs_reference)
        return self._save_transition(declaration)

    def delete_declaration(self, declaration_id: int) -> None:
        """
        Raises:
            BusinessRuleViolationError: If the declaration is no longer a draft
        """
        declaration = self.get_declaration(declaration_id)
        if declaration.status != DeclarationStatus.DRAFT:
            raise BusinessRuleViolationError(
                "delete_draft_declaration", "Only draft declarations can be deleted"
            )
        self.declaration_repository.delete(declaration)
        logger.info("customs_declaration_deleted", declaration_id=declaration_id)

    def _save_transition(self, declaration: CustomsDeclaration) -> CustomsDeclaration:
        declaration = self.declaration_repository.save(declaration)
        logger.info(
            "customs_declaration_status_changed",
            declaration_id=declaration.id.value,
            status=declaration.status,
        )
        return declaration

    @staticmethod
    def _build_items(items: list[dict[str, Any]]) -> list[CustomsItem]:
        return [CustomsItem.create(**fields) for fields in items]
