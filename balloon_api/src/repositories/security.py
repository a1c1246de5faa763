from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, or_, select

from src.db.models.security import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for studio users."""

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.get(User, user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return await self.scalar_one_or_none(stmt)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return await self.scalar_one_or_none(stmt)

    async def find_conflicting_user(
        self, *, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None
    ) -> Optional[User]:
        """Return a user sharing the given username or email, if any."""
        clauses = []
        if username:
            clauses.append(User.username == username)
        if email:
            clauses.append(User.email == email)
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return (await self.scalars(stmt.limit(1))).first()

    async def count_users(self) -> int:
        result = await self.execute(select(func.count(User.id)))
        return int(result.scalar_one())

    async def list_users(self, limit: int = 100, offset: int = 0) -> List[User]:
        stmt = select(User).order_by(User.id).offset(offset).limit(limit)
        return list(await self.scalars(stmt))
