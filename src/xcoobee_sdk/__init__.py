"""
XcooBee SDK - Async-first SDK for the XcooBee consent and data-exchange API.

This SDK provides:
- Bees, Consents, System and Users services
- Uniform SuccessResponse / PagingResponse / ErrorResponse envelopes
- API access token caching with expiry-aware refresh
- Cursor-based paging
- Multiple HTTP transport support
- Middleware support
"""

from .auth import ApiAccessTokenCache
from .client import XcooBee
from .config import Config
from .config import XcooBeeSettings
from .exceptions import DomainError
from .exceptions import IllegalStateError
from .exceptions import InvalidArgumentError
from .exceptions import TokenError
from .exceptions import TransportError
from .exceptions import XcooBeeError
from .middleware import Middleware
from .paging import PagingResponse
from .resolver import resolve_campaign_id
from .resolver import resolve_config
from .responses import ErrorResponse
from .responses import SuccessResponse

__version__ = "1.0.0"

__all__ = [
    "XcooBee",
    "Config",
    "XcooBeeSettings",
    "ApiAccessTokenCache",
    "SuccessResponse",
    "PagingResponse",
    "ErrorResponse",
    "XcooBeeError",
    "InvalidArgumentError",
    "IllegalStateError",
    "TransportError",
    "TokenError",
    "DomainError",
    "Middleware",
    "resolve_config",
    "resolve_campaign_id",
]
