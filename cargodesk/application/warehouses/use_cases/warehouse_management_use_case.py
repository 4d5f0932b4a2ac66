"""Warehouse management use case."""

from datetime import datetime

import structlog

from cargodesk.application.common.pagination import PaginatedResult, Pagination
from cargodesk.application.warehouses.protocols.warehouse_repository import (
    WarehouseRepositoryProtocol,
)
from cargodesk.domain.common.value_objects.geo_point import GeoPoint
from cargodesk.domain.common.value_objects.ids import WarehouseId
from cargodesk.domain.warehouses.entities.warehouse import Warehouse, WarehouseStatus
from cargodesk.domain.warehouses.exceptions import (
    WarehouseCodeExistsError,
    WarehouseNotFoundError,
)

logger = structlog.get_logger(__name__)


class WarehouseManagementUseCase:
    """Use case for warehouse operations."""

    def __init__(self, warehouse_repository: WarehouseRepositoryProtocol) -> None:
        self.warehouse_repository = warehouse_repository

    def create_warehouse(
        self,
        code: str,
        name: str,
        address: str,
        city: str,
        country: str,
        latitude: float | None = None,
        longitude: float | None = None,
        **optional: object,
    ) -> Warehouse:
        """
        Raises:
            WarehouseCodeExistsError: If the code is taken
        """
        if self.warehouse_repository.find_by_code(code.strip().upper()):
            raise WarehouseCodeExistsError(code.strip().upper())

        warehouse = Warehouse.create(
            code=code,
            name=name,
            address=address,
            city=city,
            country=country,
            location=GeoPoint.from_optional(latitude, longitude),
            **optional,
        )
        warehouse = self.warehouse_repository.save(warehouse)

        logger.info("warehouse_created", warehouse_id=warehouse.id.value, code=warehouse.code)
        return warehouse

    def get_warehouse(self, warehouse_id: int) -> Warehouse:
        warehouse = self.warehouse_repository.find_by_id(WarehouseId(warehouse_id))
        if not warehouse:
            raise WarehouseNotFoundError(warehouse_id)
        return warehouse

    def list_warehouses(
        self,
        pagination: Pagination,
        search: str | None = None,
        status: WarehouseStatus | None = None,
    ) -> PaginatedResult[Warehouse]:
        items, total = self.warehouse_repository.search(pagination, search=search, status=status)
        return PaginatedResult(items=items, total=total, pagination=pagination)

    def update_warehouse(self, warehouse_id: int, **changes: object) -> Warehouse:
        """
        Apply a partial update. Latitude and longitude are replaced together.

        Raises:
            WarehouseNotFoundError: If warehouse is not found
            WarehouseCodeExistsError: If the new code belongs to another warehouse
        """
        warehouse = self.get_warehouse(warehouse_id)

        code = changes.get("code")
        if isinstance(code, str):
            normalized = code.strip().upper()
            other = self.warehouse_repository.find_by_code(normalized)
            if other and other.id != warehouse.id:
                raise WarehouseCodeExistsError(normalized)
            changes["code"] = normalized

        if "latitude" in changes or "longitude" in changes:
            latitude = changes.pop("latitude", None)
            longitude = changes.pop("longitude", None)
            changes["location"] = GeoPoint.from_optional(
                latitude,  # type: ignore[arg-type]
                longitude,  # type: ignore[arg-type]
            )

        warehouse.update_details(**changes)
        warehouse = self.warehouse_repository.save(warehouse)

        logger.info("warehouse_updated", warehouse_id=warehouse_id, fields=sorted(changes))
        return warehouse

    def delete_warehouse(self, warehouse_id: int) -> None:
        warehouse = self.get_warehouse(warehouse_id)
        self.warehouse_repository.delete(warehouse)
        logger.info("warehouse_deleted", warehouse_id=warehouse_id)

    def is_operational(self, warehouse_id: int, at: datetime) -> bool:
        return self.get_warehouse(warehouse_id).is_operational(at)

    def distance_between(self, warehouse_id: int, other_id: int) -> float | None:
        """Kilometres between two warehouses, rounded to 2 places."""
        distance = self.get_warehouse(warehouse_id).distance_to(self.get_warehouse(other_id))
        return None if distance is None else round(distance, 2)
