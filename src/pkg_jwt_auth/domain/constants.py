from enum import Enum


class SigningAlgorithm(str, Enum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"


class GateState(Enum):
    NO_TOKEN = "no_token"
    EXTRACTED = "extracted"
    VERIFIED = "verified"
    AUTHORIZED = "authorized"
    ADMITTED = "admitted"
    REJECTED = "rejected"


# Wire names of the claims owned by this package
CLAIM_ID = "id"
CLAIM_EXPIRES = "exp"
CLAIM_ORIG_IAT = "orig_iat"

REGISTERED_CLAIMS = frozenset({"iss", "sub", "aud", "nbf", "iat", "jti"})
RESERVED_CLAIMS = frozenset({CLAIM_ID, CLAIM_EXPIRES, CLAIM_ORIG_IAT}) | REGISTERED_CLAIMS

DEFAULT_TOKEN_HEADER = "Authorization"
DEFAULT_TOKEN_CONTEXT_KEY = "auth_token"
DEFAULT_IDENTITY_CONTEXT_KEY = "remote_user"
DEFAULT_CLAIMS_CONTEXT_KEY = "jwt_payload"
BEARER_SCHEME = "Bearer"
