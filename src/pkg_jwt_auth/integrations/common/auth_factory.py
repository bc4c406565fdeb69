from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ...adapters.callbacks import as_authenticator, as_authorizer, as_claims_provider
from ...adapters.http.extractors import HeaderTokenExtractor
from ...adapters.jwt.codec import JWTTokenCodec
from ...application.use_cases.issue import IssueTokenUseCase
from ...application.use_cases.refresh import RefreshTokenUseCase
from ...application.use_cases.verify import VerifyTokenUseCase
from ...config.settings import TokenAuthSettings
from ...domain.entities import AuthContext, IssuedToken
from ...domain.exceptions import ConfigurationError
from ...domain.ports import (
    Authenticator,
    Authorizer,
    ClaimsProvider,
    Clock,
    TokenCodec,
    TokenExtractor,
    TokenStore,
)
from ...domain.value_objects import ClaimValue


@dataclass(slots=True)
class TokenAuthenticator:
    """
    Framework-agnostic token auth facade.

    Integrations (FastAPI, etc.) adapt this to their own dependency /
    decorator / routing systems. Holds only read-only configuration, so
    one instance serves any number of concurrent requests.
    """

    settings: TokenAuthSettings
    issue_use_case: IssueTokenUseCase
    verify_use_case: VerifyTokenUseCase
    refresh_use_case: RefreshTokenUseCase

    # --- Core operations --------------------------------------------------

    def login(self, username: str, password: str) -> IssuedToken:
        """Credentials -> signed token (or raise auth exceptions)."""
        return self.issue_use_case.execute(username, password)

    def authenticate(self, request: Any) -> AuthContext:
        """Request -> AuthContext through the full gate (or raise auth exceptions)."""
        return self.verify_use_case.execute(request)

    def verify_token(self, token: str) -> AuthContext:
        """Raw token -> AuthContext, skipping extraction and authorization."""
        return self.verify_use_case.verify_token(token)

    def refresh(self, request: Any) -> IssuedToken:
        """Request carrying a still-valid token -> renewed token."""
        return self.refresh_use_case.execute(request)

    # --- Read-only views of the configuration -----------------------------

    @property
    def realm(self) -> str:
        return self.settings.realm

    @property
    def challenge(self) -> str:
        return self.settings.challenge

    @property
    def refresh_enabled(self) -> bool:
        return self.settings.refresh_enabled

    @property
    def codec(self) -> TokenCodec:
        return self.verify_use_case.codec


def create_token_authenticator(
        settings: TokenAuthSettings,
        *,
        authenticator: Authenticator | Callable[[str, str], bool] | None,
        authorizer: Authorizer | Callable[[str, Any], bool] | None = None,
        claims_provider: ClaimsProvider | Callable[[str], Mapping[str, ClaimValue]] | None = None,
        token_store: TokenStore | None = None,
        extractor: TokenExtractor | None = None,
        clock: Clock = time.time,
) -> TokenAuthenticator:
    """
    High-level factory: settings + collaborators -> TokenAuthenticator.

    - validates settings (realm, key, algorithm, durations)
    - builds a JWTTokenCodec bound to the configured key and algorithm
    - wires the issue / verify / refresh use cases around it

    Raises:
        ConfigurationError if anything required is missing or invalid.
    """
    if settings is None:
        raise ConfigurationError("settings are required")
    settings.validate()
    if authenticator is None:
        raise ConfigurationError("authenticator is required")

    try:
        authenticator = as_authenticator(authenticator)
        authorizer = as_authorizer(authorizer)
        claims_provider = as_claims_provider(claims_provider)
    except TypeError as exc:
        raise ConfigurationError(str(exc)) from exc

    codec = JWTTokenCodec(
        secret_key=settings.key_bytes,
        algorithm=settings.signing_algorithm,
        clock=clock,
    )

    verify_uc = VerifyTokenUseCase(
        codec=codec,
        extractor=extractor or HeaderTokenExtractor(settings.token_header),
        authorizer=authorizer,
    )
    issue_uc = IssueTokenUseCase(
        codec=codec,
        authenticator=authenticator,
        timeout=settings.timeout,
        max_refresh=settings.max_refresh,
        claims_provider=claims_provider,
        token_store=token_store,
        clock=clock,
    )
    refresh_uc = RefreshTokenUseCase(
        verifier=verify_uc,
        timeout=settings.timeout,
        max_refresh=settings.max_refresh,
        token_store=token_store,
        clock=clock,
    )

    return TokenAuthenticator(
        settings=settings,
        issue_use_case=issue_uc,
        verify_use_case=verify_uc,
        refresh_use_case=refresh_uc,
    )
