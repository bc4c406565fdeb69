"""
Adapters that turn plain callables into the collaborator ports.

Host applications often already have a function like
`check_password(username, password) -> bool`; these wrappers let them
pass it straight to `create_token_authenticator` without writing a class.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Mapping, Optional

from ..domain.ports import Authenticator, Authorizer, ClaimsProvider, TokenStore
from ..domain.value_objects import ClaimValue


@dataclass(frozen=True, slots=True)
class CallableAuthenticator(Authenticator):
    func: Callable[[str, str], bool]

    def authenticate(self, username: str, password: str) -> bool:
        return bool(self.func(username, password))


@dataclass(frozen=True, slots=True)
class CallableAuthorizer(Authorizer):
    func: Callable[[str, Any], bool]

    def authorize(self, user_id: str, request: Any) -> bool:
        return bool(self.func(user_id, request))


class AllowAllAuthorizer(Authorizer):
    """Default authorizer: every authenticated user is admitted."""

    def authorize(self, user_id: str, request: Any) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class CallableClaimsProvider(ClaimsProvider):
    func: Callable[[str], Mapping[str, ClaimValue]]

    def claims_for(self, user_id: str) -> Mapping[str, ClaimValue]:
        return self.func(user_id) or {}


@dataclass(frozen=True, slots=True)
class CallableTokenStore(TokenStore):
    """Either hook may be omitted; a missing hook is a no-op."""
    store_func: Optional[Callable[[str, str, timedelta], None]] = None
    remove_func: Optional[Callable[[str, str], None]] = None

    def store(self, user_id: str, token: str, timeout: timedelta) -> None:
        if self.store_func is not None:
            self.store_func(user_id, token, timeout)

    def remove(self, user_id: str, token: str) -> None:
        if self.remove_func is not None:
            self.remove_func(user_id, token)


# --------------------------------------------------------------------- #
# Resolution helpers (used once, at construction time)
# --------------------------------------------------------------------- #

def as_authenticator(obj: Authenticator | Callable[[str, str], bool]) -> Authenticator:
    if hasattr(obj, "authenticate"):
        return obj  # type: ignore[return-value]
    if callable(obj):
        return CallableAuthenticator(obj)
    raise TypeError(f"Not an authenticator: {obj!r}")


def as_authorizer(obj: Authorizer | Callable[[str, Any], bool] | None) -> Authorizer:
    if obj is None:
        return AllowAllAuthorizer()
    if hasattr(obj, "authorize"):
        return obj  # type: ignore[return-value]
    if callable(obj):
        return CallableAuthorizer(obj)
    raise TypeError(f"Not an authorizer: {obj!r}")


def as_claims_provider(
        obj: ClaimsProvider | Callable[[str], Mapping[str, ClaimValue]] | None,
) -> ClaimsProvider | None:
    if obj is None or hasattr(obj, "claims_for"):
        return obj  # type: ignore[return-value]
    if callable(obj):
        return CallableClaimsProvider(obj)
    raise TypeError(f"Not a claims provider: {obj!r}")
