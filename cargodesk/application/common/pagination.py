"""
Pagination types for list queries.

Example:
    def list_shipments(self, pagination: Pagination) -> PaginatedResult[Shipment]:
        items, total = self.shipment_repository.search(pagination=pagination)
        return PaginatedResult(items=items, total=total, pagination=pagination)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from cargodesk.domain.common.exceptions import ValidationError

T = TypeVar("T")

# Maximum allowed page size
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Pagination:
    """
    Offset/limit window for list queries.

    Attributes:
        offset: Number of rows to skip
        limit: Maximum number of rows to return
    """

    offset: int = 0
    limit: int = 20

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationError("Offset cannot be negative", field="offset", value=self.offset)
        if self.limit < 1:
            raise ValidationError("Limit must be at least 1", field="limit", value=self.limit)
        if self.limit > MAX_PAGE_SIZE:
            raise ValidationError(
                f"Limit cannot exceed {MAX_PAGE_SIZE}", field="limit", value=self.limit
            )


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    """
    A page of items plus the total number of matching rows.

    Attributes:
        items: Items in the current window
        total: Total number of matching items
        pagination: The window used
    """

    items: list[T]
    total: int
    pagination: Pagination

    @property
    def offset(self) -> int:
        return self.pagination.offset

    @property
    def limit(self) -> int:
        return self.pagination.limit

    @property
    def has_more(self) -> bool:
        return self.pagination.offset + len(self.items) < self.total
