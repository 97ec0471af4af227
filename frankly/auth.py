"""
Credentials, authentication state and request headers.

A client is either Closed (no credential) or Open (holding exactly one
credential). The state object is passed explicitly to the dispatcher on
every call; the header builder refuses to produce headers without a
credential, so nothing but the handshake can reach the API while Closed.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .exceptions import NotAuthenticated
from .version import USER_AGENT

APP_KEY_HEADER = "frankly-app-key"
APP_SECRET_HEADER = "frankly-app-secret"
TOKEN_PARAM = "token"


# Credentials


@dataclass(frozen=True)
class KeySecret:
    """Application key/secret pair from the Frankly Console."""

    app_key: str
    app_secret: str = field(repr=False)


@dataclass(frozen=True)
class SessionToken:
    """Session token returned by the login endpoint, sent as ``?token=``."""

    token: str = field(repr=False)


@dataclass(frozen=True)
class SessionCookie:
    """Session cookies returned by the login endpoint."""

    cookies: dict[str, str] = field(repr=False)

    def header_value(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self.cookies.items())


Credential = Union[KeySecret, SessionToken, SessionCookie]


@dataclass(frozen=True)
class IdentityToken:
    """An identity token signed elsewhere, presented as-is to the login endpoint."""

    token: str = field(repr=False)


# Ways to call open(): sign locally from key/secret, or bring a token.
AuthBy = Union[KeySecret, IdentityToken]


# State


@dataclass(frozen=True)
class Closed:
    """No credential; only the handshake may talk to the API."""


@dataclass(frozen=True)
class Open:
    """Credential established by a successful handshake."""

    credential: Credential
    session: Any = None


AuthState = Union[Closed, Open]

CLOSED = Closed()


def require_credential(state: AuthState) -> Credential:
    """Return the active credential, or raise NotAuthenticated when Closed."""
    if isinstance(state, Open):
        return state.credential
    raise NotAuthenticated()


# Header builder


def base_headers(user_agent: str = USER_AGENT) -> dict[str, str]:
    """Headers sent on every request regardless of credential."""
    return {
        "accept": "application/json",
        "content-type": "application/json",
        "user-agent": user_agent,
    }


def build_headers(
    credential: Optional[Credential],
    user_agent: str = USER_AGENT,
) -> dict[str, str]:
    """
    Build the header map for a request made with ``credential``.

    Key/secret credentials add the app key/secret headers (handshake only);
    cookie credentials add a ``cookie`` header; token credentials travel in
    the query string instead (see build_params).

    Raises:
        NotAuthenticated: If no credential is given
    """
    if credential is None:
        raise NotAuthenticated()

    headers = base_headers(user_agent)

    if isinstance(credential, KeySecret):
        headers[APP_KEY_HEADER] = credential.app_key
        headers[APP_SECRET_HEADER] = credential.app_secret
    elif isinstance(credential, SessionCookie):
        headers["cookie"] = credential.header_value()
    elif not isinstance(credential, SessionToken):
        raise TypeError(f"Unsupported credential: {type(credential).__name__}")

    return headers


def build_params(
    credential: Optional[Credential],
    params: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Merge the credential's ``token`` query parameter into ``params``."""
    merged = dict(params or {})
    if isinstance(credential, SessionToken):
        merged[TOKEN_PARAM] = credential.token
    return merged
