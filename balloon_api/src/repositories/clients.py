from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select

from src.db.models.clients import Client
from .base import BaseRepository


class ClientRepository(BaseRepository):
    """Repository for client intake records."""

    async def list_clients(self, limit: int = 100, offset: int = 0) -> List[Client]:
        stmt = (
            select(Client)
            .order_by(Client.created_at.desc(), Client.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(await self.scalars(stmt))

    async def get_client(self, client_id: int) -> Optional[Client]:
        return await self.get(Client, client_id)
