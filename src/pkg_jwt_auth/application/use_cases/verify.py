from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...domain.constants import GateState
from ...domain.entities import AuthContext
from ...domain.exceptions import AuthenticationError, AuthorizationError
from ...domain.ports import Authorizer, TokenCodec, TokenExtractor
from ...domain.value_objects import Claims
from ...log import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class VerifyTokenUseCase:
    """
    Application use case (request gate).

    Walks a request through NO_TOKEN -> EXTRACTED -> VERIFIED ->
    AUTHORIZED -> ADMITTED. Any failure moves it to REJECTED and the
    domain error is re-raised; the integration layer turns every one of
    them into the same 401 response.

    Framework-agnostic: `request` is handed to the extractor and the
    authorizer untouched.
    """

    codec: TokenCodec
    extractor: TokenExtractor
    authorizer: Authorizer

    def execute(self, request: Any) -> AuthContext:
        """
        Authenticate and authorize a request and return an AuthContext.

        Raises:
            TokenExtractionError
            AlgorithmMismatchError
            InvalidSignatureError
            TokenExpiredError
            InvalidTokenError
            AuthorizationError
        """
        state = GateState.NO_TOKEN
        try:
            token = self.extractor.extract(request)
            state = GateState.EXTRACTED

            context = self.verify_token(token)
            state = GateState.VERIFIED

            if not self.authorizer.authorize(context.identity, request):
                raise AuthorizationError(f"User {context.identity!r} is not authorized")
            state = GateState.AUTHORIZED

        except (AuthenticationError, AuthorizationError) as exc:
            logger.info(
                "request rejected",
                state=state.value,
                next_state=GateState.REJECTED.value,
                reason=exc.reason,
                error=str(exc),
            )
            raise

        logger.debug("request admitted", user_id=context.identity, state=GateState.ADMITTED.value)
        return context

    def verify_token(self, token: str) -> AuthContext:
        """Signature, algorithm and expiry checks plus claim binding, without authorization."""
        payload = self.codec.decode(token)
        claims = Claims.from_payload(payload)
        return AuthContext(
            identity=claims.subject,
            claims=claims,
            raw_token=token,
            payload=dict(payload),
        )
