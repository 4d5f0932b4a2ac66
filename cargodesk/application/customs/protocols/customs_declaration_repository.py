from datetime import date
from typing import Protocol

from cargodesk.application.common.pagination import Pagination
from cargodesk.domain.common.value_objects.ids import CustomsDeclarationId, ShipmentId
from cargodesk.domain.customs.entities.customs_declaration import (
    CustomsDeclaration,
    DeclarationStatus,
    DeclarationType,
)


class CustomsDeclarationRepositoryProtocol(Protocol):
    def find_by_id(self, declaration_id: CustomsDeclarationId) -> CustomsDeclaration | None: ...

    def search(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: DeclarationStatus | None = None,
        declaration_type: DeclarationType | None = None,
        shipment_id: ShipmentId | None = None,
    ) -> tuple[list[CustomsDeclaration], int]: ...

    def next_declaration_number(self, on: date) -> str: ...

    def save(self, declaration: CustomsDeclaration) -> CustomsDeclaration: ...

    def delete(self, declaration: CustomsDeclaration) -> None: ...
