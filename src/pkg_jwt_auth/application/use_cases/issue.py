from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from ...domain.entities import IssuedToken
from ...domain.exceptions import CredentialsError, SigningError
from ...domain.ports import Authenticator, ClaimsProvider, Clock, TokenCodec, TokenStore
from ...domain.value_objects import Claims, ClaimValue, split_reserved
from ...log import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class IssueTokenUseCase:
    """
    Application use case (login):
    - Check credentials via the Authenticator port
    - Build claims (id, exp, orig_iat when refresh is enabled, provider extras)
    - Sign via TokenCodec and hand the token to the TokenStore, if any
    """

    codec: TokenCodec
    authenticator: Authenticator
    timeout: timedelta
    max_refresh: timedelta = timedelta(0)
    claims_provider: Optional[ClaimsProvider] = None
    token_store: Optional[TokenStore] = None
    clock: Clock = field(default=time.time)

    def execute(self, username: str, password: str) -> IssuedToken:
        """
        Raises:
            CredentialsError
            SigningError
        """
        if not self.authenticator.authenticate(username, password):
            raise CredentialsError("Invalid username or password")

        claims = Claims.issue(
            username,
            now=self.clock(),
            timeout_seconds=self.timeout.total_seconds(),
            refreshable=bool(self.max_refresh),
            extra=self._extra_claims(username),
        )
        token = self.codec.encode(claims)

        if self.token_store is not None:
            self.token_store.store(username, token, self.timeout)

        logger.info(
            "token issued",
            user_id=username,
            exp=claims.expires_at,
            orig_iat=claims.original_issued_at,
        )
        return IssuedToken(token=token, claims=claims)

    # ------------------------------------------------------------------ #
    # Internal
    # ------------------------------------------------------------------ #

    def _extra_claims(self, username: str) -> dict[str, ClaimValue]:
        if self.claims_provider is None:
            return {}

        try:
            kept, dropped = split_reserved(self.claims_provider.claims_for(username) or {})
        except TypeError as exc:
            raise SigningError(f"Unsupported claim value: {exc}") from exc

        if dropped:
            logger.warning(
                "claims provider returned reserved claim names; ignoring them",
                user_id=username,
                keys=list(dropped),
            )
        return kept
