from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from ...domain.entities import AuthContext
from ...domain.exceptions import AuthenticationError, AuthorizationError
from ...log import get_logger
from ..common.auth_factory import TokenAuthenticator
from .responders import JSONTokenResponder, TokenResponder
from .security import bearer_scheme, bind_request_state, unauthorized

logger = get_logger(__name__)


@dataclass(slots=True)
class FastAPITokenAuth:
    """
    FastAPI integration for pkg_jwt_auth.

    Built on top of the framework-agnostic TokenAuthenticator facade:

        fastapi_auth.get_current_user     -> gate dependency
        fastapi_auth.get_optional_user    -> gate that tolerates anonymous requests
        fastapi_auth.router()             -> POST /login, GET|POST /refresh

    Sync dependencies/endpoints run in FastAPI's threadpool, so blocking
    collaborators (password checks, token stores) do not stall the loop.
    """

    auth: TokenAuthenticator
    login_responder: TokenResponder = field(default_factory=JSONTokenResponder)
    refresh_responder: TokenResponder = field(default_factory=JSONTokenResponder)

    # ------------------------------------------------------------------ #
    # Gate dependencies
    # ------------------------------------------------------------------ #

    def get_current_user(
            self,
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> AuthContext:
        """Dependency: require a valid, authorized token."""
        try:
            ctx = self.auth.authenticate(request)
        except (AuthenticationError, AuthorizationError) as exc:
            raise unauthorized(self.auth.settings) from exc

        bind_request_state(request, ctx, self.auth.settings)
        return ctx

    def get_optional_user(
            self,
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[AuthContext]:
        """Dependency: optional authentication."""
        try:
            ctx = self.auth.authenticate(request)
        except (AuthenticationError, AuthorizationError):
            # no token or bad token -> anonymous
            return None

        bind_request_state(request, ctx, self.auth.settings)
        return ctx

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def login(self, request: Request) -> Response:
        """
        Body: {"username": "...", "password": "..."}
        Reply: whatever the login responder emits ({"token": "..."} by default).
        """
        try:
            body = await request.json()
        except ValueError as exc:
            logger.info("login rejected", reason="malformed_payload")
            raise unauthorized(self.auth.settings) from exc

        username = body.get("username") if isinstance(body, dict) else None
        password = body.get("password") if isinstance(body, dict) else None
        if not isinstance(username, str) or not isinstance(password, str):
            logger.info("login rejected", reason="malformed_payload")
            raise unauthorized(self.auth.settings)

        try:
            issued = await run_in_threadpool(self.auth.login, username, password)
        except AuthenticationError as exc:
            logger.info("login rejected", reason=exc.reason, user_id=username)
            raise unauthorized(self.auth.settings) from exc

        return self.login_responder.respond(issued.token, request)

    def refresh(self, request: Request) -> Response:
        """
        Must sit behind the gate (see `router()`). The token still needs to
        be valid on refresh.
        """
        try:
            issued = self.auth.refresh(request)
        except AuthenticationError as exc:
            raise unauthorized(self.auth.settings) from exc

        return self.refresh_responder.respond(issued.token, request)

    def router(
            self,
            *,
            login_path: str = "/login",
            refresh_path: str = "/refresh",
    ) -> APIRouter:
        """
        Router with the login endpoint and, when refresh is enabled, the
        gated refresh endpoint.
        """
        router = APIRouter()
        router.add_api_route(login_path, self.login, methods=["POST"])

        if self.auth.refresh_enabled:
            router.add_api_route(
                refresh_path,
                self.refresh,
                methods=["GET", "POST"],
                dependencies=[Depends(self.get_current_user)],
            )
        return router


"""

from fastapi import Depends, FastAPI
from pkg_jwt_auth import AuthContext
from pkg_jwt_auth.integrations.fastapi import create_fastapi_auth

fastapi_auth = create_fastapi_auth(
    settings,
    authenticator=check_password,
)

app = FastAPI()
app.include_router(fastapi_auth.router(), prefix="/auth")


@app.get("/me")
def me(current_user: AuthContext = Depends(fastapi_auth.get_current_user)):
    return {"id": current_user.identity}

"""
