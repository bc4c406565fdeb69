from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional

from ...domain.entities import AuthContext, IssuedToken
from ...domain.exceptions import AuthenticationError, RefreshWindowExceededError
from ...domain.ports import Clock, TokenStore
from ...log import get_logger
from .verify import VerifyTokenUseCase

logger = get_logger(__name__)


@dataclass(slots=True)
class RefreshTokenUseCase:
    """
    Application use case (sliding-window refresh).

    The presented token must still verify. The refresh window is measured
    from the *original* issuance (`orig_iat`), so a session can never
    outlive `max_refresh + timeout` no matter how often it is refreshed.

    The old token is not revoked here: it stays valid until its own
    `exp` unless the TokenStore's `remove` hook enforces revocation.
    """

    verifier: VerifyTokenUseCase
    timeout: timedelta
    max_refresh: timedelta
    token_store: Optional[TokenStore] = None
    clock: Clock = field(default=time.time)

    def execute(self, request: Any) -> IssuedToken:
        """
        Raises:
            TokenExtractionError
            AlgorithmMismatchError / InvalidSignatureError / InvalidTokenError
            TokenExpiredError
            RefreshWindowExceededError
            SigningError
        """
        try:
            token = self.verifier.extractor.extract(request)
            return self.refresh_token(token)
        except AuthenticationError as exc:
            logger.info("refresh rejected", reason=exc.reason, error=str(exc))
            raise

    def refresh_token(self, token: str) -> IssuedToken:
        """Exchange an already-extracted raw token for a renewed one."""
        current = self.verifier.verify_token(token)
        now = self.clock()
        self._check_window(current, now)

        claims = current.claims.refreshed(
            now=now,
            timeout_seconds=self.timeout.total_seconds(),
        )
        new_token = self.verifier.codec.encode(claims)
        user_id = claims.subject

        if self.token_store is not None:
            self.token_store.store(user_id, new_token, self.timeout)
            self._remove_old(user_id, current.raw_token)

        logger.info(
            "token refreshed",
            user_id=user_id,
            exp=claims.expires_at,
            orig_iat=claims.original_issued_at,
        )
        return IssuedToken(token=new_token, claims=claims)

    # ------------------------------------------------------------------ #
    # Internal
    # ------------------------------------------------------------------ #

    def _check_window(self, current: AuthContext, now: float) -> None:
        orig_iat = current.original_issued_at
        if orig_iat is None:
            raise RefreshWindowExceededError("Token is not refreshable (no orig_iat claim)")

        if orig_iat < int(now - self.max_refresh.total_seconds()):
            raise RefreshWindowExceededError("Refresh window has passed")

    def _remove_old(self, user_id: str, old_token: str) -> None:
        # best-effort: the new token is already issued and stored
        try:
            self.token_store.remove(user_id, old_token)
        except Exception:  # noqa: BLE001
            logger.warning("token removal hook failed", user_id=user_id, exc_info=True)
