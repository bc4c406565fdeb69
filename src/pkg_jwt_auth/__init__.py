"""
pkg_jwt_auth

Clean-architecture JWT issuing / verification / refresh core that can be
integrated with multiple frameworks (FastAPI, etc.).
"""

__version__ = "0.1.0"

from .domain.entities import AuthContext, IssuedToken
from .domain.constants import GateState, SigningAlgorithm
from .domain.exceptions import (
    ConfigurationError,
    AuthenticationError,
    AuthorizationError,
    TokenExtractionError,
    TokenExpiredError,
    InvalidTokenError,
    InvalidSignatureError,
    AlgorithmMismatchError,
    CredentialsError,
    RefreshWindowExceededError,
    SigningError,
)
from .domain.value_objects import Claims, ClaimValue
from .domain.ports import (
    Authenticator,
    Authorizer,
    ClaimsProvider,
    TokenStore,
    TokenExtractor,
    TokenCodec,
)

from .application.use_cases.issue import IssueTokenUseCase
from .application.use_cases.verify import VerifyTokenUseCase
from .application.use_cases.refresh import RefreshTokenUseCase

from .adapters.jwt.codec import JWTTokenCodec
from .adapters.http.extractors import (
    HeaderTokenExtractor,
    CookieTokenExtractor,
    FallbackTokenExtractor,
)
from .adapters.callbacks import AllowAllAuthorizer, CallableTokenStore

from .config import TokenAuthSettings, settings_from_env
from .integrations.common.auth_factory import TokenAuthenticator, create_token_authenticator

__all__ = [
    "__version__",
    # domain core
    "AuthContext",
    "IssuedToken",
    "Claims",
    "ClaimValue",
    "GateState",
    "SigningAlgorithm",
    # ports
    "Authenticator",
    "Authorizer",
    "ClaimsProvider",
    "TokenStore",
    "TokenExtractor",
    "TokenCodec",
    # exceptions
    "ConfigurationError",
    "AuthenticationError",
    "AuthorizationError",
    "TokenExtractionError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InvalidSignatureError",
    "AlgorithmMismatchError",
    "CredentialsError",
    "RefreshWindowExceededError",
    "SigningError",
    # use cases
    "IssueTokenUseCase",
    "VerifyTokenUseCase",
    "RefreshTokenUseCase",
    # adapters
    "JWTTokenCodec",
    "HeaderTokenExtractor",
    "CookieTokenExtractor",
    "FallbackTokenExtractor",
    "AllowAllAuthorizer",
    "CallableTokenStore",
    # config / facade
    "TokenAuthSettings",
    "settings_from_env",
    "TokenAuthenticator",
    "create_token_authenticator",
]
