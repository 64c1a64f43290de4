"""
FastAPI dependencies for authentication and authorization.

get_current_user never fails: a missing or invalid token simply means an
anonymous request. The ensure_* dependencies build on it to protect routes.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import BaseModel

from jobly.core.exceptions import ForbiddenError, UnauthorizedError
from jobly.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


class TokenUser(BaseModel):
    """Claims of an authenticated request"""
    username: str
    is_admin: bool = False


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenUser]:
    """
    Extract the user from the Bearer token, if one was provided and is valid.

    Returns None for anonymous requests and for tokens that fail validation.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        return None

    username = payload.get("sub")
    if username is None:
        return None

    return TokenUser(username=username, is_admin=bool(payload.get("is_admin", False)))


def ensure_logged_in(user: Optional[TokenUser] = Depends(get_current_user)) -> TokenUser:
    """
    Require a logged in user.

    Raises:
        UnauthorizedError: If the request carries no valid token
    """
    if user is None:
        raise UnauthorizedError()
    return user


def ensure_admin(user: TokenUser = Depends(ensure_logged_in)) -> TokenUser:
    """
    Require a logged in admin.

    Raises:
        UnauthorizedError: If not logged in
        ForbiddenError: If the user is not an admin
    """
    if not user.is_admin:
        raise ForbiddenError()
    return user


def ensure_admin_or_self(username: str, user: TokenUser = Depends(ensure_logged_in)) -> TokenUser:
    """
    Require an admin, or the user named by the {username} path parameter.

    Raises:
        UnauthorizedError: If not logged in
        ForbiddenError: If the user is neither admin nor the one in the path
    """
    if not user.is_admin and user.username != username:
        raise ForbiddenError()
    return user
