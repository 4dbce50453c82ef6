"""
Configuration management for XcooBee SDK.

Two layers live here:

- `XcooBeeSettings` handles SDK-wide configuration with support for environment
  variables, .env files, and sensible defaults. Environment variables are
  automatically loaded with the XCOOBEE_ prefix.
  Example: XCOOBEE_API_KEY=your_key
- `Config` is the immutable credential tuple a single API call is made with.
  A default `Config` is held by the SDK and may be overridden per call.
"""

from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

DEFAULT_API_URL_ROOT = "https://api.xcoobee.net"
DEFAULT_ERROR_CODE = 400
EXPIRATION_TOLERANCE_IN_MS_DEFAULT = 10000


class Config(BaseModel):
    """
    Credentials and account options used to make an API call.

    Any field may be left unset on an overriding config; unset fields fall
    back to the default config (see `xcoobee_sdk.resolver.resolve_config`).

    Example:
        config = Config(api_key="...", api_secret="...", campaign_id="...")
    """

    model_config = ConfigDict(frozen=True)

    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    api_url_root: Optional[str] = None
    campaign_id: Optional[str] = None
    pgp_secret: Optional[str] = None
    pgp_password: Optional[str] = None


class XcooBeeSettings(BaseSettings):
    """
    Configuration settings for XcooBee SDK with environment variable support.

    This class automatically loads configuration from:
    - Environment variables (with XCOOBEE_ prefix)
    - .env files
    - Default values for optional settings

    Example:
        # From environment
        export XCOOBEE_API_KEY=your_key
        export XCOOBEE_API_SECRET=your_secret
        export XCOOBEE_TIMEOUT=60.0

        # In code
        settings = XcooBeeSettings()
        config = settings.to_config()
    """

    api_key: Optional[str] = Field(default=None, description="XcooBee API key")
    api_secret: Optional[str] = Field(default=None, description="XcooBee API secret")
    api_url_root: str = DEFAULT_API_URL_ROOT
    campaign_id: Optional[str] = None
    pgp_secret: Optional[str] = None
    pgp_password: Optional[str] = None
    timeout: float = 30.0
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'
    token_expiration_tolerance_ms: int = EXPIRATION_TOLERANCE_IN_MS_DEFAULT
    # Code carried by every ErrorResponse; not derived from the transport status.
    error_response_code: int = DEFAULT_ERROR_CODE

    model_config = SettingsConfigDict(
        env_prefix="XCOOBEE_", env_file=".env", extra="ignore"
    )

    def to_config(self) -> Optional[Config]:
        """
        Builds the default `Config` from these settings.

        Returns:
            Config | None: None when no API key is configured.
        """
        if not self.api_key:
            return None
        return Config(
            api_key=self.api_key,
            api_secret=self.api_secret,
            api_url_root=self.api_url_root,
            campaign_id=self.campaign_id,
            pgp_secret=self.pgp_secret,
            pgp_password=self.pgp_password,
        )
