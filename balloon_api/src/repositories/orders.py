from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.orders import Order, OrderItem
from .base import BaseRepository


class OrderRepository(BaseRepository):
    """Repository for supplier orders and their items."""

    async def list_orders(
        self,
        *,
        user_id: Optional[int] = None,
        design_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Order]:
        stmt = select(Order)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if design_id is not None:
            stmt = stmt.where(Order.design_id == design_id)
        stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit)
        return list(await self.scalars(stmt))

    async def get_order(self, order_id: int) -> Optional[Order]:
        return await self.get(Order, order_id)

    async def list_items(self, order_id: int) -> List[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
        return list(await self.scalars(stmt))
