"""Access token utilities.

Tokens are issued and verified by the identity backend. The client only
reads their claims (subject, email, expiry) and never checks the signature.
"""

from datetime import datetime, timezone

import jwt
from pydantic import BaseModel

from fitjourney.util.error import TokenDecodeError


class AccessTokenClaims(BaseModel):
    """Claims the client relies on."""

    sub: str
    email: str | None = None
    exp: datetime


def read_access_token_claims(token: str) -> AccessTokenClaims:
    """Decode an access token without verifying it.

    Args:
        token: Encoded JWT access token

    Returns:
        Parsed claims

    Raises:
        TokenDecodeError: If the token is malformed or lacks required claims
    """
    try:
        payload = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
            algorithms=["HS256", "RS256", "ES256"],
        )
    except jwt.InvalidTokenError as e:
        raise TokenDecodeError(f"Invalid access token: {e}")

    if "sub" not in payload or "exp" not in payload:
        raise TokenDecodeError("Access token is missing sub or exp claim")

    return AccessTokenClaims(
        sub=payload["sub"],
        email=payload.get("email"),
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
