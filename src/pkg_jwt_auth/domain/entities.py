from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .value_objects import Claims


@dataclass(slots=True)
class AuthContext:
    """
    Result of a successful pass through the request gate.

    Bundles the authenticated identity, the full verified claims map and
    the raw token string the request presented.
    """
    identity: str
    claims: Claims
    raw_token: str
    payload: Dict[str, Any] = field(default_factory=dict)

    # --- Read-only shortcuts ------------------------------------------------

    @property
    def expires_at(self) -> int:
        return self.claims.expires_at

    @property
    def original_issued_at(self) -> Optional[int]:
        return self.claims.original_issued_at

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """A freshly signed token together with the claims it carries."""
    token: str
    claims: Claims

    @property
    def subject(self) -> str:
        return self.claims.subject
