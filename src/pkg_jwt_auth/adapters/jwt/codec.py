import time
from typing import Any, Mapping

import jwt
from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidSignatureError as JWTInvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
    PyJWTError,
)

from ...domain.constants import CLAIM_EXPIRES, SigningAlgorithm
from ...domain.exceptions import (
    AlgorithmMismatchError,
    InvalidSignatureError,
    InvalidTokenError,
    SigningError,
    TokenExpiredError,
)
from ...domain.ports import Clock, TokenCodec
from ...domain.value_objects import Claims


class JWTTokenCodec(TokenCodec):
    """
    Adapter implementing TokenCodec port using PyJWT and a shared HMAC secret.

    Infrastructure layer:
    - Knows about JWT structure, signing and verification.
    - Checks expiry against the injected clock instead of PyJWT's own
      wall-clock check, so every path agrees on "now".
    """

    def __init__(
        self,
        secret_key: bytes,
        algorithm: SigningAlgorithm | str = SigningAlgorithm.HS256,
        clock: Clock = time.time,
    ) -> None:
        self._key = secret_key
        self._algorithm = SigningAlgorithm(algorithm).value
        self._clock = clock

    @property
    def algorithm(self) -> str:
        return self._algorithm

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def encode(self, claims: Claims) -> str:
        try:
            return jwt.encode(claims.to_payload(), self._key, algorithm=self._algorithm)
        except (PyJWTError, TypeError, ValueError) as exc:
            raise SigningError(f"Could not sign token: {exc}") from exc

    def decode(self, token: str) -> Mapping[str, Any]:
        """
        Decode and validate a JWT token.

        Returns:
            Mapping of token claims (dict-like).

        Raises:
            AlgorithmMismatchError
            InvalidSignatureError
            TokenExpiredError
            InvalidTokenError
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") != self._algorithm:
                raise AlgorithmMismatchError(
                    f"Invalid signing algorithm: expected {self._algorithm}, got {header.get('alg')!r}"
                )

            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": [CLAIM_EXPIRES]},
            )

        except InvalidAlgorithmError as exc:
            raise AlgorithmMismatchError(f"Invalid signing algorithm: {exc}") from exc
        except JWTInvalidSignatureError as exc:
            raise InvalidSignatureError("Signature verification failed") from exc
        except (DecodeError, JWTInvalidTokenError) as exc:
            raise InvalidTokenError(f"Invalid token: {exc}") from exc
        except PyJWTError as exc:
            # e.g. InvalidKeyError for a secret that looks like a PEM key
            raise InvalidTokenError(f"Could not verify token: {exc}") from exc

        self._check_expiry(payload)
        return payload

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _check_expiry(self, payload: Mapping[str, Any]) -> None:
        exp = payload.get(CLAIM_EXPIRES)
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError("Expiration Time claim (exp) must be a number")

        # valid only while exp is strictly in the future
        if exp <= self._clock():
            raise TokenExpiredError("Token has expired")
