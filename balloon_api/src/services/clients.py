from __future__ import annotations

import logging
from typing import Any, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InvalidStateError, NotFoundError
from src.db.models.clients import Client
from src.repositories.clients import ClientRepository
from src.schemas.clients import ClientCreate, ClientUpdate, CRMContact, CRMResult
from src.services.base import BaseService
from src.services.crm import CRMService

logger = logging.getLogger(__name__)


class ClientService(BaseService):
    """Client intake records and their CRM mirror."""

    def __init__(self, session: AsyncSession, crm: CRMService) -> None:
        super().__init__(session)
        self.clients = ClientRepository(session)
        self.crm = crm

    async def list_clients(self) -> List[Client]:
        return await self.clients.list_clients()

    async def get_client(self, client_id: int) -> Client:
        client = await self.clients.get_client(client_id)
        if not client:
            raise NotFoundError("Client not found")
        return client

    async def _sync(self, client: Client) -> CRMResult:
        """Push the client to the CRM and record the outcome; never raises for CRM failures."""
        result = await self.crm.sync_client(client)
        if result.success:
            client.crm_synced = True
            if result.contact_id:
                client.crm_id = result.contact_id
            await self.commit_and_refresh(client)
            logger.info("Client %s synced to %s as %s", client.id, self.crm.provider_name, client.crm_id)
        else:
            logger.warning("CRM sync failed for client %s: %s", client.id, result.message)
        return result

    # PUBLIC_INTERFACE
    async def submit_intake(self, payload: ClientCreate) -> Tuple[Client, CRMResult | None]:
        """Store an intake submission, then sync it to the CRM when one is configured."""
        client = Client(**payload.model_dump())
        await self.clients.add(client)
        await self.commit_and_refresh(client)
        logger.info("Stored intake for client %s", client.id)

        result = await self._sync(client) if self.crm.is_configured else None
        return client, result

    async def update_client(self, client_id: int, payload: ClientUpdate) -> Client:
        client = await self.get_client(client_id)
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k not in ("name", "email", "can_text")
        }
        if not changes:
            raise InvalidStateError("No valid fields to update")
        for field, value in changes.items():
            setattr(client, field, value)
        await self.commit_and_refresh(client)

        if client.crm_synced and client.crm_id and self.crm.is_configured:
            result = await self.crm.update_contact(client.crm_id, client)
            if not result.success:
                logger.warning("CRM update failed for client %s: %s", client.id, result.message)
        return client

    async def delete_client(self, client_id: int) -> None:
        client = await self.get_client(client_id)
        await self.clients.delete(client)
        await self.commit()

    # PUBLIC_INTERFACE
    async def sync_client(self, client_id: int) -> Tuple[Client, CRMResult]:
        """Force a CRM sync of one client."""
        client = await self.get_client(client_id)
        return client, await self._sync(client)

    # PUBLIC_INTERFACE
    async def get_crm_contact(self, client_id: int) -> CRMContact:
        """Read the client's contact back from the CRM."""
        client = await self.get_client(client_id)
        if not self.crm.is_configured:
            raise InvalidStateError("No CRM provider configured")
        if not client.crm_id:
            raise InvalidStateError("Client has not been synced to the CRM")
        contact = await self.crm.get_contact(client.crm_id)
        if contact is None:
            raise NotFoundError("CRM contact not found")
        return CRMContact(provider=self.crm.provider_name, contact_id=client.crm_id, **contact)
