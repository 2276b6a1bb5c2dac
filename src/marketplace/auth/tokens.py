"""Access tokens: HS256 JWTs carrying the user id and role.

Configured through ``JWT_SECRET`` and ``JWT_EXPIRES_MINUTES`` (one day by default).
"""

import os
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt

from marketplace.exceptions import AuthenticationError, InvalidTokenError

ALGORITHM = "HS256"
DEFAULT_EXPIRES_MINUTES = 60 * 24


def _secret_key() -> str:
    return os.environ.get("JWT_SECRET", "renew-marketplace-dev-secret")


def _expires_in() -> timedelta:
    return timedelta(minutes=int(os.environ.get("JWT_EXPIRES_MINUTES", DEFAULT_EXPIRES_MINUTES)))


def create_access_token(user_id: str, role: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta if expires_delta is not None else _expires_in())
    claims = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(claims, _secret_key(), algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the token's claims.

    Raises ``AuthenticationError`` for an expired token and
    ``InvalidTokenError`` for anything else that fails verification.
    """
    try:
        claims = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise AuthenticationError("Token expired.") from exc
    except JWTError as exc:
        raise InvalidTokenError("Invalid token.") from exc

    if not claims.get("sub") or not claims.get("role"):
        raise InvalidTokenError("Invalid token.")
    return claims
