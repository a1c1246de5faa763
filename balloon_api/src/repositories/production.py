from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.enums import ProductionStatus
from src.db.models.production import Production
from .base import BaseRepository


class ProductionRepository(BaseRepository):
    """Repository for production records."""

    async def list_production(
        self,
        *,
        status: Optional[ProductionStatus] = None,
        design_id: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Production]:
        stmt = select(Production)
        if status:
            stmt = stmt.where(Production.status == status)
        if design_id is not None:
            stmt = stmt.where(Production.design_id == design_id)
        stmt = stmt.order_by(Production.created_at.desc(), Production.id.desc()).offset(offset).limit(limit)
        return list(await self.scalars(stmt))

    async def get_production(self, production_id: int) -> Optional[Production]:
        return await self.get(Production, production_id)
