from pydantic import BaseModel, Field

from cargodesk.feature_flags import FeatureFlags


class AppSettingsResponse(BaseModel):
    """Schema for returning public application settings."""

    feature_flags: FeatureFlags = Field(..., description="All feature flags")
    default_currency: str = Field(..., description="Currency used when none is given")
    company_name: str
