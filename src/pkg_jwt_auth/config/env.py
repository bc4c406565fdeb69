from __future__ import annotations

import os
from datetime import timedelta
from typing import Mapping, Optional

from ..domain.constants import DEFAULT_TOKEN_HEADER, SigningAlgorithm
from ..domain.exceptions import ConfigurationError
from .settings import TokenAuthSettings


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> TokenAuthSettings:
    env = os.environ if environ is None else environ

    def _seconds(key: str, default: float) -> timedelta:
        raw = env.get(key)
        if raw is None or not str(raw).strip():
            return timedelta(seconds=default)
        try:
            return timedelta(seconds=float(raw))
        except ValueError as exc:
            raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}") from exc

    realm = env.get("JWT_REALM")
    secret_key = env.get("JWT_SECRET_KEY")
    if not all([realm, secret_key]):
        missing = [
            n
            for n, v in [
                ("JWT_REALM", realm),
                ("JWT_SECRET_KEY", secret_key),
            ]
            if not v
        ]
        raise ConfigurationError(f"Missing token auth settings: {', '.join(missing)}")

    settings = TokenAuthSettings(
        realm=realm,
        secret_key=secret_key,
        signing_algorithm=env.get("JWT_SIGNING_ALGORITHM") or SigningAlgorithm.HS256.value,
        timeout=_seconds("JWT_TIMEOUT_SECONDS", 3600),
        max_refresh=_seconds("JWT_MAX_REFRESH_SECONDS", 0),
        token_header=env.get("JWT_TOKEN_HEADER") or DEFAULT_TOKEN_HEADER,
    )
    settings.validate()
    return settings
