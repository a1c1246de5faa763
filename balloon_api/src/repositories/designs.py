from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.designs import Design
from src.db.models.inventory import Accessory, DesignAccessory
from .base import BaseRepository


class DesignRepository(BaseRepository):
    """Repository for saved designs."""

    async def list_designs(
        self, *, user_id: Optional[int], limit: int = 100, offset: int = 0
    ) -> List[Design]:
        """List designs newest first; user_id=None lists every user's designs."""
        stmt = select(Design)
        if user_id is not None:
            stmt = stmt.where(Design.user_id == user_id)
        stmt = stmt.order_by(Design.created_at.desc(), Design.id.desc()).offset(offset).limit(limit)
        return list(await self.scalars(stmt))

    async def get_design(self, design_id: int) -> Optional[Design]:
        return await self.get(Design, design_id)


class DesignAccessoryRepository(BaseRepository):
    """Repository for accessories attached to designs."""

    async def get_link(self, design_id: int, accessory_id: int) -> Optional[DesignAccessory]:
        stmt = select(DesignAccessory).where(
            DesignAccessory.design_id == design_id,
            DesignAccessory.accessory_id == accessory_id,
        )
        return await self.scalar_one_or_none(stmt)

    async def list_for_design(self, design_id: int) -> List[tuple[DesignAccessory, Accessory]]:
        stmt = (
            select(DesignAccessory, Accessory)
            .join(Accessory, Accessory.id == DesignAccessory.accessory_id)
            .where(DesignAccessory.design_id == design_id)
            .order_by(Accessory.name, DesignAccessory.id)
        )
        result = await self.execute(stmt)
        return [(link, accessory) for link, accessory in result.all()]
