from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.enums import BalloonColor, BalloonSize, InventoryStatus
from src.db.models.inventory import Accessory, InventoryItem
from .base import BaseRepository


class InventoryRepository(BaseRepository):
    """Repository for balloon stock, one row per (color, size)."""

    async def list_items(
        self,
        *,
        color: Optional[BalloonColor] = None,
        status: Optional[InventoryStatus] = None,
    ) -> List[InventoryItem]:
        stmt = select(InventoryItem)
        if color:
            stmt = stmt.where(InventoryItem.color == color)
        if status:
            stmt = stmt.where(InventoryItem.status == status)
        stmt = stmt.order_by(InventoryItem.color, InventoryItem.size)
        return list(await self.scalars(stmt))

    async def get_item(self, item_id: int) -> Optional[InventoryItem]:
        return await self.get(InventoryItem, item_id)

    async def get_by_color_size(self, color: str, size: str) -> Optional[InventoryItem]:
        stmt = select(InventoryItem).where(
            InventoryItem.color == BalloonColor(color),
            InventoryItem.size == BalloonSize(size),
        )
        return await self.scalar_one_or_none(stmt)


class AccessoryRepository(BaseRepository):
    """Repository for accessories."""

    async def list_accessories(self) -> List[Accessory]:
        stmt = select(Accessory).order_by(Accessory.name, Accessory.id)
        return list(await self.scalars(stmt))

    async def get_accessory(self, accessory_id: int) -> Optional[Accessory]:
        return await self.get(Accessory, accessory_id)
