from __future__ import annotations

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import NotFoundError, PermissionDeniedError
from src.db.models.designs import Design
from src.db.models.enums import UserRole
from src.repositories.designs import DesignRepository


class BaseService:
    """
    Base class for services. Holds a session for use across multiple repositories.

    Services keep business logic and orchestration, delegate data access to
    repositories and own the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def commit_and_refresh(self, *entities: Any) -> None:
        """Commit, then reload server-side defaults such as timestamps."""
        await self.session.commit()
        for entity in entities:
            await self.session.refresh(entity)

    @staticmethod
    def is_admin(user: Any) -> bool:
        return UserRole(user.role) == UserRole.ADMIN

    def ensure_owner_or_admin(self, owner_id: int, user: Any, what: str = "resource") -> None:
        if owner_id != user.id and not self.is_admin(user):
            raise PermissionDeniedError(f"You do not have access to this {what}")

    async def ensure_design_access(self, design_id: Optional[int], user: Any) -> Optional[Design]:
        """Load a referenced design the user owns (admins: any). None passes through."""
        if design_id is None:
            return None
        design = await DesignRepository(self.session).get_design(design_id)
        if not design:
            raise NotFoundError("Design not found")
        self.ensure_owner_or_admin(design.user_id, user, "design")
        return design
