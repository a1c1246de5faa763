from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.payments import Payment
from .base import BaseRepository


class PaymentRepository(BaseRepository):
    """Repository for payment intents."""

    async def list_payments(
        self, *, user_id: Optional[int], limit: int = 100, offset: int = 0
    ) -> List[Payment]:
        stmt = select(Payment)
        if user_id is not None:
            stmt = stmt.where(Payment.user_id == user_id)
        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc()).offset(offset).limit(limit)
        return list(await self.scalars(stmt))

    async def get_payment(self, payment_id: int) -> Optional[Payment]:
        return await self.get(Payment, payment_id)
