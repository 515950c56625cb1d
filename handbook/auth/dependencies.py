"""FastAPI authentication dependencies.

Token issuance lives with the external identity provider; this module only
reads the bearer token and hands the caller's id to the routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from handbook.config.settings import get_settings
from handbook.exceptions import AuthenticationError, AuthorizationError

from .security import decode_access_token


async def _get_current_user_id(request: Request) -> str | None:
    """Return the authenticated user id, or None when auth is disabled."""
    if get_settings().AUTH_DISABLED:
        return None

    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith("Bearer "):
        msg = "Unauthorized: No token provided"
        raise AuthenticationError(msg)

    user_id = decode_access_token(auth_header.split(" ", 1)[1])
    request.state.user_id = user_id
    return user_id


CurrentUserId = Annotated[str | None, Depends(_get_current_user_id)]


def ensure_same_user(current_user_id: str | None, target_user_id: str | None) -> None:
    """Reject callers acting on someone else's data."""
    if current_user_id is None or not target_user_id:
        return
    if current_user_id != target_user_id:
        msg = "Cannot modify another user's data"
        raise AuthorizationError(msg)
