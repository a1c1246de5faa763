from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.logging import user_id_var
from src.core.security import decode_token
from src.db.models.enums import UserRole
from src.db.models.security import User
from src.db.session import get_async_session
from src.repositories.security import UserRepository

logger = logging.getLogger(__name__)

# OAuth2 bearer (used by docs); login endpoint path referenced here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")

_CREDENTIALS_HEADERS = {"WWW-Authenticate": "Bearer"}


# PUBLIC_INTERFACE
async def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Resolve and return the current user from the Authorization bearer token.

    Only access tokens are accepted; refresh tokens are rejected with 401.
    """
    try:
        payload = decode_token(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token", headers=_CREDENTIALS_HEADERS
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type", headers=_CREDENTIALS_HEADERS
        )

    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token", headers=_CREDENTIALS_HEADERS
        )

    user = await UserRepository(session).get_user_by_id(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found", headers=_CREDENTIALS_HEADERS
        )
    user_id_var.set(str(user.id))
    return user


# PUBLIC_INTERFACE
async def get_current_active_user(user: User = Depends(get_current_user)) -> User:
    """Ensure user is active."""
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return user


# PUBLIC_INTERFACE
def require_roles(*required: UserRole | str):
    """
    Create a dependency that requires the current user to hold one of the given roles.
    """
    required_set = {UserRole(r).value for r in required}

    async def _dep(user: User = Depends(get_current_active_user)) -> User:
        if UserRole(user.role).value not in required_set:
            logger.info("Role check failed: user role %s not in %s", user.role, sorted(required_set))
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return user

    return _dep


# Common role sets
require_admin = require_roles(UserRole.ADMIN)
require_inventory_writer = require_roles(UserRole.ADMIN, UserRole.INVENTORY_MANAGER)
