from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ...adapters.http.extractors import DEFAULT_COOKIE_NAME


class TokenResponder(Protocol):
    """Port for returning a freshly issued token to the client (login and refresh)."""

    def respond(self, token: str, request: Request) -> Response:
        ...


class JSONTokenResponder(TokenResponder):
    """Default: `{"token": "<jwt>"}`."""

    def respond(self, token: str, request: Request) -> Response:
        return JSONResponse({"token": token})


class CookieTokenResponder(TokenResponder):
    """
    Sets the token as an HTTP-only cookie and returns an empty 204.

    Pair it with `CookieTokenExtractor` (or a FallbackTokenExtractor that
    includes one) so the gate reads the cookie back.
    """

    def __init__(
        self,
        cookie_name: str = DEFAULT_COOKIE_NAME,
        *,
        max_age: timedelta | None = None,
        secure: bool = True,
        samesite: str = "lax",
        path: str = "/",
    ) -> None:
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.secure = secure
        self.samesite = samesite
        self.path = path

    def respond(self, token: str, request: Request) -> Response:
        response = Response(status_code=204)
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=int(self.max_age.total_seconds()) if self.max_age else None,
            path=self.path,
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )
        return response
