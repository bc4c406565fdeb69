from __future__ import annotations

from typing import Any, Sequence

from ...domain.constants import BEARER_SCHEME, DEFAULT_TOKEN_HEADER
from ...domain.exceptions import TokenExtractionError
from ...domain.ports import TokenExtractor

DEFAULT_COOKIE_NAME = "access_token"


class HeaderTokenExtractor(TokenExtractor):
    """
    Reads `<header>: Bearer <token>`.

    Works with any request object exposing a `headers` mapping with a
    `get` method (Starlette, Werkzeug, plain dicts wrapped in a namespace).
    The header value must be exactly two space-separated parts and the
    first one must be the literal `Bearer`.
    """

    def __init__(self, header_name: str = DEFAULT_TOKEN_HEADER) -> None:
        self.header_name = header_name

    def extract(self, request: Any) -> str:
        auth_header = request.headers.get(self.header_name)
        if not auth_header:
            raise TokenExtractionError("Auth header empty")

        parts = auth_header.split(" ", 1)
        if not (len(parts) == 2 and parts[0] == BEARER_SCHEME):
            raise TokenExtractionError("Invalid auth header")

        token = parts[1]
        if not token or " " in token:
            raise TokenExtractionError("Invalid auth header")
        return token


class CookieTokenExtractor(TokenExtractor):
    """Reads the token from a cookie (e.g. the one set by CookieTokenResponder)."""

    def __init__(self, cookie_name: str = DEFAULT_COOKIE_NAME) -> None:
        self.cookie_name = cookie_name

    def extract(self, request: Any) -> str:
        token = (request.cookies.get(self.cookie_name) or "").strip()
        if not token:
            raise TokenExtractionError(f"Cookie {self.cookie_name!r} empty")
        return token


class FallbackTokenExtractor(TokenExtractor):
    """
    Tries each extractor in order and returns the first token found.

    The usual setup is header first, cookie second.
    """

    def __init__(self, extractors: Sequence[TokenExtractor]) -> None:
        if not extractors:
            raise ValueError("FallbackTokenExtractor needs at least one extractor")
        self.extractors = tuple(extractors)

    def extract(self, request: Any) -> str:
        failures = []
        for extractor in self.extractors:
            try:
                return extractor.extract(request)
            except TokenExtractionError as exc:
                failures.append(str(exc))
        raise TokenExtractionError("; ".join(failures))
