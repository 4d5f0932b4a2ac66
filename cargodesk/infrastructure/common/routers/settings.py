from fastapi import APIRouter

from cargodesk.config import get_settings
from cargodesk.feature_flags import get_feature_flags
from cargodesk.infrastructure.common.schemas import AppSettingsResponse

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_app_settings() -> AppSettingsResponse:
    """
    Get public application settings.

    Returns non-user-specific settings that affect application behavior.
    This is a public endpoint that doesn't require authentication.
    """
    settings = get_settings()
    return AppSettingsResponse(
        feature_flags=get_feature_flags(),
        default_currency=settings.DEFAULT_CURRENCY,
        company_name=settings.COMPANY_NAME,
    )
