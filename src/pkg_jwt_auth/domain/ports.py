from __future__ import annotations

from datetime import timedelta
from typing import Any, Mapping, Protocol

from .value_objects import Claims, ClaimValue


class Clock(Protocol):
    """Returns the current Unix time in seconds."""

    def __call__(self) -> float:
        ...


class Authenticator(Protocol):
    """Port for checking a username/password pair at login."""

    def authenticate(self, username: str, password: str) -> bool:
        ...


class Authorizer(Protocol):
    """
    Port for the post-authentication access check.

    `request` is whatever the integration passes through (e.g. a Starlette
    Request); the core never inspects it.
    """

    def authorize(self, user_id: str, request: Any) -> bool:
        ...


class ClaimsProvider(Protocol):
    """Port for adding extra claims to a token at login."""

    def claims_for(self, user_id: str) -> Mapping[str, ClaimValue]:
        ...


class TokenStore(Protocol):
    """
    Optional persistence hooks for issued tokens.

    Implementations must be safe for concurrent calls from many requests.
    """

    def store(self, user_id: str, token: str, timeout: timedelta) -> None:
        ...

    def remove(self, user_id: str, token: str) -> None:
        ...


class TokenExtractor(Protocol):
    """
    Port for reading the raw token string from an incoming request.

    Raises:
      - TokenExtractionError when no usable token is present
    """

    def extract(self, request: Any) -> str:
        ...


class TokenCodec(Protocol):
    """
    Port for signing claims and verifying signed tokens.

    Implementations live in the adapters layer (e.g. PyJWT codec).
    """

    def encode(self, claims: Claims) -> str:
        """
        Sign the claims.

        Raises:
          - SigningError
        """
        ...

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode and verify the given token.

        Should:
          - reject tokens signed with another algorithm
          - verify signature
          - check expiry
        Raises:
          - AlgorithmMismatchError
          - InvalidSignatureError
          - TokenExpiredError
          - InvalidTokenError
        """
        ...
