"""
Frankly identity tokens.

An identity token is a short-lived HS256 JWS asserting which application
(and optionally which user and role) is authenticating. The server hands
out a one-time nonce, the client signs it with the app secret, and the
login endpoint exchanges the token for a session.

Usage:
    token = generate_identity_token(app_key, app_secret, nonce, role="admin")
    claims = decode_identity_token(token, app_secret)
"""

import logging
import time
from typing import Any, Optional

import jwt
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidCredential

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_HEADER = {
    "typ": "JWS",
    "alg": TOKEN_ALGORITHM,
    "cty": "frankly-it;v1",
}
TOKEN_LIFETIME = 10 * 24 * 60 * 60  # 10 days


class IdentityClaims(BaseModel):
    """Claims carried by an identity token, keyed by their wire names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_key: str = Field(alias="aak")
    issued_at: int = Field(alias="iat")
    expires_at: int = Field(alias="exp")
    nonce: str = Field(alias="nce")
    user_id: Optional[Any] = Field(default=None, alias="uid")
    role: Optional[str] = None

    def to_jwt_claims(self) -> dict[str, Any]:
        """Wire form; unset optional claims are left out rather than null."""
        return self.model_dump(by_alias=True, exclude_none=True)


def generate_identity_token(
    app_key: str,
    app_secret: str,
    nonce: str,
    user_id: Optional[Any] = None,
    role: Optional[str] = None,
    now: Optional[float] = None,
) -> str:
    """
    Sign an identity token for the login handshake.

    Args:
        app_key: Application key from the Frankly Console
        app_secret: Application secret used as the HMAC key
        nonce: One-time value obtained from the server
        user_id: Optional user the token speaks for
        role: Optional role to claim ("admin" for server-side apps)
        now: Clock override in epoch seconds

    Returns:
        Compact JWS (header.claims.signature)

    Raises:
        InvalidCredential: If app_secret is empty or missing
    """
    if not app_secret:
        raise InvalidCredential("app_secret is required to sign an identity token")

    issued_at = int(time.time() if now is None else now)
    claims = IdentityClaims(
        app_key=app_key,
        issued_at=issued_at,
        expires_at=issued_at + TOKEN_LIFETIME,
        nonce=nonce,
        user_id=user_id,
        role=role,
    )

    logger.debug(f"Signing identity token for app {app_key} (role={role})")
    return jwt.encode(
        claims.to_jwt_claims(),
        app_secret,
        algorithm=TOKEN_ALGORITHM,
        headers=TOKEN_HEADER,
    )


def decode_identity_token(
    token: str,
    app_secret: str,
    verify_lifetime: bool = True,
) -> IdentityClaims:
    """
    Verify an identity token's signature and return its claims.

    Raises:
        InvalidCredential: On a missing secret, a malformed token, a
            signature mismatch or (when verify_lifetime) an expired token
    """
    if not app_secret:
        raise InvalidCredential("app_secret is required to verify an identity token")

    options = {"verify_exp": verify_lifetime, "verify_iat": verify_lifetime}
    try:
        payload = jwt.decode(
            token,
            app_secret,
            algorithms=[TOKEN_ALGORITHM],
            options=options,
        )
    except jwt.InvalidTokenError as e:
        raise InvalidCredential(f"Identity token rejected: {e}") from e

    return IdentityClaims.model_validate(payload)
