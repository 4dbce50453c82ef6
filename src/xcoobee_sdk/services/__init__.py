"""
Service facades of the XcooBee SDK.

Each service groups the operations of one resource family. All of them share
the token cache, user cache and GraphQL client handed in by `XcooBee`.
"""

from .base import Service
from .bees import Bees
from .consents import Consents
from .system import System
from .users import Users

__all__ = ["Service", "Bees", "Consents", "System", "Users"]
