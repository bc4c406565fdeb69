from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request, status
from fastapi.security import HTTPBearer

from ...config.settings import TokenAuthSettings
from ...domain.constants import DEFAULT_CLAIMS_CONTEXT_KEY
from ...domain.entities import AuthContext

# Expose this so apps get the bearer scheme in their OpenAPI schema
bearer_scheme = HTTPBearer(auto_error=False)

NOT_AUTHORIZED = "Not Authorized"


def unauthorized(settings: TokenAuthSettings) -> HTTPException:
    """
    The one response every rejection maps to.

    Carries no detail about which check failed.
    """
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=NOT_AUTHORIZED,
        headers={"WWW-Authenticate": settings.challenge},
    )


def bind_request_state(request: Request, ctx: AuthContext, settings: TokenAuthSettings) -> None:
    """Expose identity, claims and raw token on `request.state` under the configured keys."""
    setattr(request.state, settings.identity_context_key, ctx.identity)
    setattr(request.state, settings.claims_context_key, ctx.payload)
    setattr(request.state, settings.token_context_key, ctx.raw_token)


def extract_claims(request: Request, key: str = DEFAULT_CLAIMS_CONTEXT_KEY) -> Dict[str, Any]:
    """
    Claims bound by the gate for this request.

    Returns an empty dict when the request never went through the gate.
    """
    claims = getattr(request.state, key, None)
    if not claims:
        return {}
    return dict(claims)
