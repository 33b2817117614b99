"""
Authentication

Provides FastAPI dependencies resolving the current user from a JWT issued by
the external identity provider. Supports bearer headers and the
``access_token`` cookie.
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from formbuilder.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class UserPrincipal:
    """
    Authenticated user principal.

    All user info is extracted from JWT claims (no database lookup required).
    The user id is the identity provider's subject and is stored on forms
    as the owner.
    """
    user_id: str
    email: str = ""
    name: str = ""


async def get_current_user_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> UserPrincipal | None:
    """
    Get the current user from JWT token (optional).

    Checks for authentication in this order:
    1. Authorization: Bearer header (for API clients)
    2. access_token cookie (for browser clients)

    Returns None if no token is provided or token is invalid.
    Does not raise an exception for unauthenticated requests.
    """
    token = None

    if credentials:
        token = credentials.credentials
    elif "access_token" in request.cookies:
        token = request.cookies["access_token"]

    if not token:
        return None

    payload = decode_token(token, expected_type="access")

    if payload is None:
        return None

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Token is missing the sub claim")
        return None

    return UserPrincipal(
        user_id=str(user_id),
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )


# Type aliases for dependency injection
CurrentUserOptional = Annotated[UserPrincipal | None, Depends(get_current_user_optional)]
