"""JWT helpers for the bearer tokens issued by the identity provider."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from handbook.config.settings import get_settings
from handbook.exceptions import AuthorizationError


ALGORITHM = "HS256"


def create_access_token(subject: str | Any, expires_delta: timedelta = timedelta(hours=1)) -> str:
    """Create a signed access token for ``subject``."""
    now = datetime.now(UTC)
    to_encode = {"exp": now + expires_delta, "iat": now, "sub": str(subject)}
    return jwt.encode(to_encode, get_settings().SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by ``token``.

    Raises
    ------
        AuthorizationError: If the token is expired, malformed or has no subject.
    """
    try:
        payload = jwt.decode(token, get_settings().SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        msg = "Unauthorized: Token has expired"
        raise AuthorizationError(msg) from e
    except jwt.InvalidTokenError as e:
        msg = "Unauthorized: Invalid token"
        raise AuthorizationError(msg) from e

    # Older tokens carry the id under "userId"
    subject = payload.get("sub") or payload.get("userId")
    if not subject:
        msg = "Unauthorized: Invalid token"
        raise AuthorizationError(msg)
    return str(subject)
