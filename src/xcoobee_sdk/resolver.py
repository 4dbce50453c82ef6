"""
Resolution of the effective configuration for a single API call.

A call may be given an overriding `Config`; any field it sets wins over the
default config held by the SDK.
"""

from typing import Optional

from xcoobee_sdk.config import Config
from xcoobee_sdk.exceptions import IllegalStateError

_CONFIG_FIELDS = tuple(Config.model_fields)


def resolve_config(override: Optional[Config], default: Optional[Config]) -> Config:
    """
    Merges an overriding config onto the default config, field by field.

    Args:
        override (Config | None): Per-call config. Its non-None fields win.
        default (Config | None): The SDK's default config.

    Returns:
        Config: The effective config. A field set by neither is None.

    Raises:
        IllegalStateError: If neither config is given.
    """
    if override is None and default is None:
        raise IllegalStateError("Default config has not been set yet.")
    if override is None:
        return default
    if default is None:
        return override

    merged = {}
    for name in _CONFIG_FIELDS:
        value = getattr(override, name)
        merged[name] = value if value is not None else getattr(default, name)
    return Config(**merged)


def resolve_campaign_id(
    campaign_id: Optional[str],
    override: Optional[Config],
    default: Optional[Config],
) -> Optional[str]:
    """
    Picks the campaign ID for a call: the explicit argument first, then the
    overriding config, then the default config.
    """
    if campaign_id is not None:
        return campaign_id
    if override is not None and override.campaign_id is not None:
        return override.campaign_id
    if default is not None:
        return default.campaign_id
    return None
