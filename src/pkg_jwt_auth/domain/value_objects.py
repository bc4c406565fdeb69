# src/pkg_jwt_auth/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .constants import CLAIM_EXPIRES, CLAIM_ID, CLAIM_ORIG_IAT, RESERVED_CLAIMS
from .exceptions import InvalidTokenError


# --- Claim values ----------------------------------------------------------

ClaimValue = Union[str, int, float, bool, None, List["ClaimValue"], Dict[str, "ClaimValue"]]

_OWN_CLAIMS = (CLAIM_ID, CLAIM_EXPIRES, CLAIM_ORIG_IAT)


def check_claim_value(value: Any, path: str = "claim") -> ClaimValue:
    """
    Validate that `value` can travel inside a token payload.

    Accepts strings, numbers, booleans, None, and lists / string-keyed
    mappings of those. Tuples are normalized to lists.
    """
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (list, tuple)):
        return [check_claim_value(v, f"{path}[{i}]") for i, v in enumerate(value)]
    if isinstance(value, Mapping):
        checked: Dict[str, ClaimValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: claim keys must be strings, got {key!r}")
            checked[key] = check_claim_value(item, f"{path}.{key}")
        return checked
    raise TypeError(f"{path}: unsupported claim value type {type(value).__name__}")


def split_reserved(extra: Mapping[str, Any]) -> Tuple[Dict[str, ClaimValue], Tuple[str, ...]]:
    """
    Separate user-supplied claims from keys that collide with reserved names.

    Returns the checked claims to keep and the sorted colliding keys.
    """
    kept: Dict[str, ClaimValue] = {}
    dropped = []
    for key, value in extra.items():
        if key in RESERVED_CLAIMS:
            dropped.append(key)
            continue
        kept[key] = check_claim_value(value, key)
    return kept, tuple(sorted(dropped))


def _as_timestamp(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return int(value)


# --- Claims snapshot -------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Immutable snapshot of the facts a token asserts.

    `id`, `exp` and `orig_iat` are first-class fields; everything else
    lives in `extra` and is merged into the wire payload only by
    `to_payload()`, where the first-class fields always win.
    """
    subject: str
    expires_at: int
    original_issued_at: Optional[int] = None
    extra: Mapping[str, ClaimValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def issue(
            cls,
            subject: str,
            *,
            now: float,
            timeout_seconds: float,
            refreshable: bool,
            extra: Mapping[str, ClaimValue] | None = None,
    ) -> "Claims":
        return cls(
            subject=subject,
            expires_at=int(now + timeout_seconds),
            original_issued_at=int(now) if refreshable else None,
            extra=extra or {},
        )

    def refreshed(self, *, now: float, timeout_seconds: float) -> "Claims":
        """New snapshot with a renewed expiry; subject, orig_iat and extras carried forward."""
        return replace(self, expires_at=int(now + timeout_seconds))

    @property
    def refreshable(self) -> bool:
        return self.original_issued_at is not None

    def to_payload(self) -> Dict[str, ClaimValue]:
        payload: Dict[str, ClaimValue] = dict(self.extra)
        payload[CLAIM_ID] = self.subject
        payload[CLAIM_EXPIRES] = self.expires_at
        if self.original_issued_at is not None:
            payload[CLAIM_ORIG_IAT] = self.original_issued_at
        return payload

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Claims":
        """
        Rebuild a snapshot from a verified token payload.

        Raises:
            InvalidTokenError if `id` or `exp` is missing or mistyped.
        """
        subject = payload.get(CLAIM_ID)
        if not isinstance(subject, str):
            raise InvalidTokenError("Token 'id' claim is missing or not a string")

        expires_at = _as_timestamp(payload.get(CLAIM_EXPIRES))
        if expires_at is None:
            raise InvalidTokenError("Token 'exp' claim is missing or not numeric")

        return cls(
            subject=subject,
            expires_at=expires_at,
            original_issued_at=_as_timestamp(payload.get(CLAIM_ORIG_IAT)),
            extra={k: v for k, v in payload.items() if k not in _OWN_CLAIMS},
        )
