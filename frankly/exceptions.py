"""
Frankly SDK Exceptions.

All SDK exceptions inherit from FranklyError for easy catching.
"""

import json
from typing import Any, Optional


class FranklyError(Exception):
    """Base exception for all Frankly SDK errors."""

    def __init__(self, message: str, code: str = "FRANKLY_ERROR"):
        super().__init__(message)
        self.code = code
        self.message = message


class InvalidCredential(FranklyError):
    """Signing inputs are missing or malformed, or a token failed verification."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_CREDENTIAL")


class NotAuthenticated(FranklyError):
    """Operation attempted while the client has no session credential."""

    def __init__(self, message: str = "Client is not authenticated. Call open() first."):
        super().__init__(message, "NOT_AUTHENTICATED")


class RequestError(FranklyError):
    """
    The API answered with a non-2xx status.

    The status code and raw body are carried verbatim; callers tell
    400/401/403/404/409 apart by inspecting ``status_code``.
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        target = f"{method} {url}" if method and url else "request"
        super().__init__(f"{target} failed with HTTP {status_code}", "REQUEST_ERROR")
        self.status_code = status_code
        self.body = body
        self.method = method
        self.url = url

    def json(self) -> Any:
        """Parse the error body as JSON, or None if it isn't JSON."""
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError:
            return None


class TransportError(FranklyError):
    """Network-level failure (DNS, refused connection, timeout)."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, "TRANSPORT_ERROR")
        self.cause = cause


class InvalidResponse(FranklyError):
    """A successful response carried a body that is not valid JSON."""

    def __init__(self, message: str, body: str = ""):
        super().__init__(message, "INVALID_RESPONSE")
        self.body = body


class ConfigurationError(FranklyError):
    """Client configuration is unusable (e.g. an origin without a scheme)."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class ContentLengthMismatch(FranklyError, ValueError):
    """Declared upload length differs from the size of the payload."""

    def __init__(self, declared: int, actual: int):
        super().__init__(
            f"content_length={declared} does not match payload size {actual}",
            "CONTENT_LENGTH_MISMATCH",
        )
        self.declared = declared
        self.actual = actual
