from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List

from ..domain.constants import (
    DEFAULT_CLAIMS_CONTEXT_KEY,
    DEFAULT_IDENTITY_CONTEXT_KEY,
    DEFAULT_TOKEN_CONTEXT_KEY,
    DEFAULT_TOKEN_HEADER,
    SigningAlgorithm,
)
from ..domain.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class TokenAuthSettings:
    """
    Token issuing / verification settings.

    Host code decides how to construct this (env, config file, etc.).
    Immutable; derive variants with `dataclasses.replace`.
    """
    realm: str
    secret_key: bytes | str
    signing_algorithm: str = SigningAlgorithm.HS256.value

    timeout: timedelta = field(default_factory=lambda: timedelta(hours=1))
    # 0 disables refresh entirely
    max_refresh: timedelta = field(default_factory=timedelta)

    # Request wiring
    token_header: str = DEFAULT_TOKEN_HEADER
    token_context_key: str = DEFAULT_TOKEN_CONTEXT_KEY
    identity_context_key: str = DEFAULT_IDENTITY_CONTEXT_KEY
    claims_context_key: str = DEFAULT_CLAIMS_CONTEXT_KEY

    @property
    def key_bytes(self) -> bytes:
        if isinstance(self.secret_key, str):
            return self.secret_key.encode("utf-8")
        return bytes(self.secret_key or b"")

    @property
    def refresh_enabled(self) -> bool:
        return self.max_refresh != timedelta(0)

    @property
    def challenge(self) -> str:
        """Value of the WWW-Authenticate header sent with every rejection."""
        return f'JWT realm="{self.realm}"'

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError listing every problem found.
        """
        problems: List[str] = []

        if not (self.realm or "").strip():
            problems.append("realm is required")
        if not self.key_bytes:
            problems.append("secret_key is required")

        supported = [a.value for a in SigningAlgorithm]
        if self.signing_algorithm not in supported:
            problems.append(
                f"signing_algorithm must be one of {supported}, got {self.signing_algorithm!r}"
            )

        if self.timeout <= timedelta(0):
            problems.append("timeout must be positive")
        if self.max_refresh < timedelta(0):
            problems.append("max_refresh must not be negative")
        if not (self.token_header or "").strip():
            problems.append("token_header must not be empty")

        if problems:
            raise ConfigurationError("Invalid token auth settings: " + "; ".join(problems))
