"""Feature flags module for centralized feature toggle management."""

from typing import Literal

from pydantic import BaseModel, Field

from cargodesk.config import get_settings


class FeatureFlags(BaseModel):
    """Pydantic model defining all feature flags in the application."""

    customer_registrations: bool = Field(
        ..., description="Whether customer self-registration is enabled"
    )


FeatureFlagKey = Literal["customer_registrations"]


def get_feature_flags() -> FeatureFlags:
    """
    Get current feature flags based on application configuration.

    Returns:
        FeatureFlags instance with current flag values
    """
    settings = get_settings()

    return FeatureFlags(
        customer_registrations=settings.ALLOW_CUSTOMER_REGISTRATIONS,
    )


def get_feature_flag(key: FeatureFlagKey) -> bool:
    """
    Get the value of a specific feature flag.

    Args:
        key: The feature flag key to retrieve. Must be a valid FeatureFlagKey.

    Returns:
        Boolean value of the feature flag
    """
    flags = get_feature_flags()
    return getattr(flags, key)


def is_customer_registrations_enabled() -> bool:
    """Check if customer self-registration is enabled."""
    return get_feature_flag("customer_registrations")
