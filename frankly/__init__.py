"""
Frankly SDK - Python client for the Frankly chat platform REST API.

Quick Start:
    from frankly import FranklyClient, KeySecret

    client = FranklyClient()
    client.open(KeySecret(app_key, app_secret))

    room = client.create_room({"title": "Hi", "status": "active"})
    messages = client.read_room_message_list(room["id"], {"limit": 10})

    client.close()

Features:
    - Admin authentication from an app key/secret or a pre-signed identity token
    - One method per API route (rooms, roles, messages, announcements,
      users, files, sessions, apps) plus generic create/read/update/delete
    - Typed errors carrying the HTTP status and body of failed calls
"""

from .version import __version__, USER_AGENT
from .auth import IdentityToken, KeySecret, SessionCookie, SessionToken
from .client import FranklyClient
from .config import FranklyConfig
from .identity import IdentityClaims, decode_identity_token, generate_identity_token
from .session import Session
from .exceptions import (
    FranklyError,
    InvalidCredential,
    NotAuthenticated,
    RequestError,
    TransportError,
    InvalidResponse,
    ConfigurationError,
    ContentLengthMismatch,
)

__all__ = [
    # Core
    "FranklyClient",
    "FranklyConfig",
    "Session",
    # Authentication
    "KeySecret",
    "IdentityToken",
    "SessionToken",
    "SessionCookie",
    "IdentityClaims",
    "generate_identity_token",
    "decode_identity_token",
    # Exceptions
    "FranklyError",
    "InvalidCredential",
    "NotAuthenticated",
    "RequestError",
    "TransportError",
    "InvalidResponse",
    "ConfigurationError",
    "ContentLengthMismatch",
    # Version
    "__version__",
    "USER_AGENT",
]
