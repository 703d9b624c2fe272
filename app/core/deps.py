"""
FastAPI dependencies for authentication and authorization.

Authentication never rejects a request: `get_principal` yields the verified
Principal or None, and that value is passed explicitly to the guards. The
guards are the only place a request is turned away (401).

Usage:
    @router.post("/", dependencies=[Depends(require_admin)])
    @router.get("/{username}")
    def get_user(username: str, principal: Principal = Depends(require_self_or_admin)): ...
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import UnauthorizedError
from app.core.security import JWTError, decode_token
from app.schemas.auth import Principal

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing header is not an error here
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(token: Optional[str]) -> Optional[Principal]:
    """
    Verify a bearer token and return its Principal.

    Returns None for a missing, malformed, badly signed or expired token,
    or one whose payload lacks a username.
    """
    if not token:
        return None

    try:
        payload = decode_token(token.strip())
        return Principal.model_validate(payload)
    except (JWTError, PydanticValidationError) as e:
        logger.debug(f"Ignoring invalid token: {e}")
        return None


def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Extract the optional Principal from the Authorization header."""
    if credentials is None:
        return None
    return authenticate(credentials.credentials)


def ensure_logged_in(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise UnauthorizedError("You must be logged in")
    return principal


def ensure_admin(principal: Optional[Principal]) -> Principal:
    if principal is None or not principal.is_admin:
        raise UnauthorizedError("Admin privileges required")
    return principal


def ensure_correct_user_or_admin(principal: Optional[Principal], username: str) -> Principal:
    if principal is None or not (principal.is_admin or principal.username == username):
        raise UnauthorizedError("Access denied - only admins or the correct user can access this route")
    return principal


def require_authenticated(principal: Optional[Principal] = Depends(get_principal)) -> Principal:
    """Guard: any logged-in user."""
    return ensure_logged_in(principal)


def require_admin(principal: Optional[Principal] = Depends(get_principal)) -> Principal:
    """Guard: admins only."""
    return ensure_admin(principal)


def require_self_or_admin(
    username: str,
    principal: Optional[Principal] = Depends(get_principal),
) -> Principal:
    """Guard: the user named by the `username` path parameter, or an admin."""
    return ensure_correct_user_or_admin(principal, username)
