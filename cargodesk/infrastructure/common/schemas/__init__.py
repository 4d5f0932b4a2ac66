"""Common infrastructure schemas."""

from cargodesk.infrastructure.common.schemas.response_wrappers import (
    PaginatedResponse,
    SuccessResponse,
)
from cargodesk.infrastructure.common.schemas.settings_schemas import AppSettingsResponse

__all__ = [
    "AppSettingsResponse",
    "PaginatedResponse",
    "SuccessResponse",
]
