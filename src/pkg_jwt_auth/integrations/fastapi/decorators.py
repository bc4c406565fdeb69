from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, ParamSpec, TypeVar

from fastapi import HTTPException
from starlette.requests import Request

from ...domain.exceptions import AuthenticationError, AuthorizationError
from ..common.auth_factory import TokenAuthenticator
from .security import bind_request_state, unauthorized

P = ParamSpec("P")
R = TypeVar("R")


@dataclass(slots=True)
class FastAPIDecorators:
    """
    Decorator-based auth helpers for FastAPI / Starlette route handlers.

    Built on top of the framework-agnostic `TokenAuthenticator` facade.
    The wrapped handler needs a `request: Request` argument.

    Usage example:

        auth_decorators = FastAPIDecorators(auth=token_authenticator)

        @router.get("/me")
        @auth_decorators.authenticated
        async def me(request: Request, current_user: AuthContext):
            return {"id": current_user.identity}

    All decorators will:
      - Run the request gate (extract, verify, authorize)
      - Bind identity / claims / raw token on `request.state`
      - Inject `current_user` (AuthContext) into kwargs
      - Translate domain errors into the uniform 401 HTTPException
    """

    auth: TokenAuthenticator

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _extract_request(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Request:
        """Extract Request object from function arguments."""
        if "request" in kwargs and isinstance(kwargs["request"], Request):
            return kwargs["request"]

        for arg in args:
            if isinstance(arg, Request):
                return arg

        raise ValueError(
            "Request object not found. "
            "Ensure your route has a 'request: Request' parameter."
        )

    def _admit(self, request: Request) -> Any:
        try:
            ctx = self.auth.authenticate(request)
        except (AuthenticationError, AuthorizationError) as exc:
            raise unauthorized(self.auth.settings) from exc

        bind_request_state(request, ctx, self.auth.settings)
        return ctx

    def _admit_optional(self, request: Request) -> Any:
        try:
            return self._admit(request)
        except HTTPException:
            return None

    def _wrap(self, func: Callable[P, R], admit: Callable[[Request], Any]) -> Callable[P, Any]:
        @wraps(func)
        async def async_impl(*args: P.args, **kwargs: P.kwargs) -> Any:
            request = self._extract_request(args, kwargs)
            kwargs.setdefault("current_user", admit(request))
            return await func(*args, **kwargs)  # type: ignore[misc]

        @wraps(func)
        def sync_impl(*args: P.args, **kwargs: P.kwargs) -> Any:
            request = self._extract_request(args, kwargs)
            kwargs.setdefault("current_user", admit(request))
            return func(*args, **kwargs)

        wrapper = async_impl if asyncio.iscoroutinefunction(func) else sync_impl
        # FastAPI must not treat the injected context as a request parameter
        wrapper.__signature__ = self._public_signature(func)  # type: ignore[attr-defined]
        return wrapper

    @staticmethod
    def _public_signature(func: Callable[..., Any]) -> inspect.Signature:
        """Handler signature without `current_user`, annotations resolved."""
        try:
            signature = inspect.signature(func, eval_str=True)
        except NameError:
            signature = inspect.signature(func)
        params = [p for p in signature.parameters.values() if p.name != "current_user"]
        return signature.replace(parameters=params)

    # ------------------------------------------------------------------ #
    # decorators
    # ------------------------------------------------------------------ #

    def authenticated(self, func: Callable[P, R]) -> Callable[P, Any]:
        """
        Decorator: require authentication.

        Injects `current_user: AuthContext` into kwargs.
        """
        return self._wrap(func, self._admit)

    def optional_auth(self, func: Callable[P, R]) -> Callable[P, Any]:
        """
        Decorator: optional authentication.

        Injects `current_user: AuthContext | None` into kwargs.
        """
        return self._wrap(func, self._admit_optional)
