from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user, require_admin
from src.core.security import get_password_hash
from src.db.models.enums import UserRole
from src.db.models.security import User
from src.db.session import get_async_session
from src.repositories.security import UserRepository
from src.schemas.auth import UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["Users"])


async def _load_user(repo: UserRepository, user_id: int) -> User:
    user = await repo.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _ensure_self_or_admin(current: User, user_id: int) -> None:
    if current.id != user_id and UserRole(current.role) != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to access this user")


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[UserRead],
    summary="List users",
    description="List all users. Requires admin role.",
    dependencies=[Depends(require_admin)],
)
async def list_users(
    session: AsyncSession = Depends(get_async_session),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[UserRead]:
    users = await UserRepository(session).list_users(limit=limit, offset=offset)
    return [UserRead.model_validate(u) for u in users]


# PUBLIC_INTERFACE
@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    description="Get a user by id (self or admin).",
)
async def get_user(
    user_id: int = Path(..., description="User ID"),
    current: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> UserRead:
    _ensure_self_or_admin(current, user_id)
    return UserRead.model_validate(await _load_user(UserRepository(session), user_id))


# PUBLIC_INTERFACE
@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    description="Update a user (self or admin). Only admins may change role or active flag.",
)
async def update_user(
    payload: UserUpdate,
    user_id: int = Path(..., description="User ID"),
    current: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> UserRead:
    _ensure_self_or_admin(current, user_id)
    repo = UserRepository(session)
    user = await _load_user(repo, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if ("role" in changes or "is_active" in changes) and UserRole(current.role) != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only admins can change role or status")
    if "email" in changes and await repo.find_conflicting_user(
        username=None, email=changes["email"], exclude_id=user.id
    ):
        raise HTTPException(status_code=400, detail="Email already registered")

    password = changes.pop("password", None)
    if password:
        user.hashed_password = get_password_hash(password)
    for field, value in changes.items():
        setattr(user, field, value)
    await repo.commit()
    await repo.refresh(user)
    return UserRead.model_validate(user)


# PUBLIC_INTERFACE
@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    description="Delete a user. Requires admin role.",
    dependencies=[Depends(require_admin)],
)
async def delete_user(
    user_id: int = Path(..., description="User ID"),
    session: AsyncSession = Depends(get_async_session),
) -> None:
    repo = UserRepository(session)
    await repo.delete(await _load_user(repo, user_id))
    await repo.commit()
