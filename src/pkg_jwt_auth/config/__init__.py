"""
pkg_jwt_auth.config

- TokenAuthSettings: realm, signing key/algorithm, lifetimes and request wiring.
- settings_from_env: build and validate settings from JWT_* variables.
"""

from __future__ import annotations

from .env import settings_from_env
from .settings import TokenAuthSettings

__all__ = [
    "TokenAuthSettings",
    "settings_from_env",
]
