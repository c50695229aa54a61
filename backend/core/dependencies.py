"""Shared dependencies for FastAPI endpoints."""

import logging
from typing import NamedTuple

from fastapi import HTTPException, Request, status

logger = logging.getLogger("Dependencies")


class RequestIdentity(NamedTuple):
    user_id: str
    username: str


def get_request_identity(request: Request) -> RequestIdentity:
    """Return the authenticated user's id and name from the token payload.

    AuthMiddleware stores the decoded payload on request.state.user; when
    authentication is disabled there is no payload and this raises 401.
    """
    payload = getattr(request.state, "user", None)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return RequestIdentity(user_id=payload.get("id"), username=payload.get("username"))
