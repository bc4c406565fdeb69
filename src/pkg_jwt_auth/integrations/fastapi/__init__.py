from __future__ import annotations

import time
from typing import Any, Callable, Mapping

from ...config.settings import TokenAuthSettings
from ...domain.ports import (
    Authenticator,
    Authorizer,
    ClaimsProvider,
    Clock,
    TokenExtractor,
    TokenStore,
)
from ...domain.value_objects import ClaimValue
from ..common.auth_factory import TokenAuthenticator, create_token_authenticator
from .decorators import FastAPIDecorators
from .deps import FastAPITokenAuth
from .responders import CookieTokenResponder, JSONTokenResponder, TokenResponder
from .security import bearer_scheme, extract_claims, unauthorized


def create_fastapi_auth(
    settings: TokenAuthSettings,
    *,
    authenticator: Authenticator | Callable[[str, str], bool] | None,
    authorizer: Authorizer | Callable[[str, Any], bool] | None = None,
    claims_provider: ClaimsProvider | Callable[[str], Mapping[str, ClaimValue]] | None = None,
    token_store: TokenStore | None = None,
    extractor: TokenExtractor | None = None,
    login_responder: TokenResponder | None = None,
    refresh_responder: TokenResponder | None = None,
    clock: Clock = time.time,
) -> FastAPITokenAuth:
    """
    High-level helper for FastAPI apps:

    - Creates a TokenAuthenticator from settings and collaborators
    - Wraps it in FastAPITokenAuth, exposing:

        fastapi_auth.get_current_user
        fastapi_auth.get_optional_user
        fastapi_auth.router()

    Raises:
        ConfigurationError when settings or the authenticator are missing/invalid.
    """
    auth: TokenAuthenticator = create_token_authenticator(
        settings,
        authenticator=authenticator,
        authorizer=authorizer,
        claims_provider=claims_provider,
        token_store=token_store,
        extractor=extractor,
        clock=clock,
    )
    return FastAPITokenAuth(
        auth=auth,
        login_responder=login_responder or JSONTokenResponder(),
        refresh_responder=refresh_responder or JSONTokenResponder(),
    )


__all__ = [
    "FastAPITokenAuth",
    "FastAPIDecorators",
    "TokenResponder",
    "JSONTokenResponder",
    "CookieTokenResponder",
    "bearer_scheme",
    "create_fastapi_auth",
    "extract_claims",
    "unauthorized",
]
