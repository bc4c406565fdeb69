class ConfigurationError(Exception):
    """Raised at construction time when required settings are missing or invalid."""
    pass


class AuthenticationError(Exception):
    """Raised when a request or a login attempt cannot be authenticated."""
    reason = "authentication_error"


class AuthorizationError(Exception):
    """Raised when the authorizer denies an authenticated user."""
    reason = "authorization_denied"


class TokenExtractionError(AuthenticationError):
    """Raised when no usable token can be read from the request."""
    reason = "extraction_failed"


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    reason = "expired"


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or invalid."""
    reason = "invalid_token"


class InvalidSignatureError(InvalidTokenError):
    reason = "signature_invalid"


class AlgorithmMismatchError(InvalidTokenError):
    """Raised when the token header names another algorithm than the configured one."""
    reason = "algorithm_mismatch"


class CredentialsError(AuthenticationError):
    """Raised when the authenticator rejects a username/password pair."""
    reason = "authentication_failed"


class RefreshWindowExceededError(AuthenticationError):
    """Raised when a token is not (or no longer) eligible for refresh."""
    reason = "refresh_window_exceeded"


class SigningError(AuthenticationError):
    reason = "signing_failed"
