"""
Session/auth handshake.

Exchanges a signed identity token for a session credential:

    1. GET  auth/nonce   -> one-time nonce (a JSON string)
    2. sign the nonce locally (key/secret flow only)
    3. POST auth?identity_token=...  -> session body and/or cookies
"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .auth import (
    AuthBy,
    Credential,
    IdentityToken,
    KeySecret,
    Open,
    SessionCookie,
    SessionToken,
)
from .exceptions import InvalidCredential, InvalidResponse, NotAuthenticated
from .identity import generate_identity_token
from .transport import Dispatcher

logger = logging.getLogger(__name__)

NONCE_PATH = ("auth", "nonce")
LOGIN_PATH = ("auth",)
ADMIN_ROLE = "admin"


class Session(BaseModel):
    """Session returned by the login endpoint."""

    model_config = ConfigDict(extra="allow")

    token: Optional[str] = None
    expiry: Optional[Any] = None
    app_id: Optional[Any] = None
    user_id: Optional[Any] = None
    role: Optional[str] = None


def fetch_nonce(dispatcher: Dispatcher, credential: Optional[Credential] = None) -> str:
    """Ask the server for a one-time nonce."""
    response = dispatcher.handshake("GET", NONCE_PATH, credential)
    try:
        nonce = response.json()
    except ValueError:
        # Some deployments answer with the bare quoted string
        nonce = response.text.strip().strip('"')

    if not isinstance(nonce, str) or not nonce:
        raise InvalidResponse("Nonce endpoint returned no nonce", response.text)
    return nonce


def login(
    dispatcher: Dispatcher,
    identity_token: str,
    credential: Optional[Credential] = None,
) -> Open:
    """
    Present an identity token to the login endpoint.

    Returns:
        Open state holding the session credential

    Raises:
        NotAuthenticated: If the response carries neither token nor cookie
        InvalidResponse: If the body is not JSON or has mistyped session fields
    """
    response = dispatcher.handshake(
        "POST",
        LOGIN_PATH,
        credential,
        params={"identity_token": identity_token},
    )

    body: dict[str, Any] = {}
    if response.content and response.content.strip():
        try:
            parsed = response.json()
        except ValueError as e:
            raise InvalidResponse(f"Login response is not JSON: {e}", response.text) from e
        if isinstance(parsed, dict):
            body = parsed

    try:
        session = Session.model_validate(body)
    except ValidationError as e:
        raise InvalidResponse(f"Login response is malformed: {e}", response.text) from e
    cookies = response.cookies.get_dict()

    if session.token:
        active: Credential = SessionToken(session.token)
    elif cookies:
        active = SessionCookie(cookies)
    else:
        raise NotAuthenticated("Login succeeded but returned no session credential")

    logger.info(
        f"Opened session (app={session.app_id}, user={session.user_id}, role={session.role})"
    )
    return Open(credential=active, session=session)


def open_session(dispatcher: Dispatcher, auth: AuthBy) -> Open:
    """
    Run the handshake for either way of authenticating.

    KeySecret: fetch a nonce, sign an admin identity token, log in.
    IdentityToken: log in with the supplied token directly.
    """
    if isinstance(auth, KeySecret):
        if not auth.app_key or not auth.app_secret:
            raise InvalidCredential("app_key and app_secret are both required")
        nonce = fetch_nonce(dispatcher, auth)
        identity_token = generate_identity_token(
            auth.app_key, auth.app_secret, nonce, role=ADMIN_ROLE
        )
        return login(dispatcher, identity_token, auth)

    if isinstance(auth, IdentityToken):
        if not auth.token:
            raise InvalidCredential("identity token is empty")
        return login(dispatcher, auth.token)

    raise TypeError(f"Unsupported authentication: {type(auth).__name__}")
