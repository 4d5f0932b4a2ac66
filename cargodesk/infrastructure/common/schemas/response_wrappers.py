"""Common response wrapper schemas for API responses."""

from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel

from cargodesk.application.common.pagination import PaginatedResult

T = TypeVar("T")
E = TypeVar("E")


class SuccessResponse(BaseModel):
    """Generic success response wrapper."""

    success: bool
    message: str


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic pagination wrapper."""

    items: list[T]
    total: int
    offset: int
    limit: int

    @classmethod
    def from_result(
        cls, result: PaginatedResult[E], convert: Callable[[E], T]
    ) -> "PaginatedResponse[T]":
        return cls(
            items=[convert(item) for item in result.items],
            total=result.total,
            offset=result.offset,
            limit=result.limit,
        )
