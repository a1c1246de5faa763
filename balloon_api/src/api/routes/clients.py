from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user, require_admin
from src.db.session import get_async_session
from src.schemas.clients import ClientCreate, ClientRead, ClientSyncResponse, ClientUpdate, CRMContact, CRMStatus
from src.services.clients import ClientService
from src.services.crm import CRMService, get_crm_service

router = APIRouter(prefix="/clients", tags=["Clients"])


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ClientRead],
    summary="List clients",
    dependencies=[Depends(get_current_active_user)],
)
async def list_clients(
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> List[ClientRead]:
    return [ClientRead.model_validate(c) for c in await ClientService(session, crm).list_clients()]


# PUBLIC_INTERFACE
@router.get(
    "/crm/status",
    response_model=CRMStatus,
    summary="CRM status",
    description="Whether a CRM provider is configured, and which one.",
    dependencies=[Depends(get_current_active_user)],
)
async def crm_status(crm: CRMService = Depends(get_crm_service)) -> CRMStatus:
    return CRMStatus(configured=crm.is_configured, provider=crm.provider_name)


# PUBLIC_INTERFACE
@router.get(
    "/{client_id}",
    response_model=ClientRead,
    summary="Get client",
    dependencies=[Depends(get_current_active_user)],
)
async def get_client(
    client_id: int = Path(..., description="Client ID"),
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> ClientRead:
    return ClientRead.model_validate(await ClientService(session, crm).get_client(client_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit intake form",
    description=(
        "Public endpoint for the client intake form. The record is stored first; when a CRM "
        "provider is configured the client is then synced. A failed sync does not fail the request."
    ),
)
async def submit_intake(
    payload: ClientCreate,
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> ClientRead:
    client, _ = await ClientService(session, crm).submit_intake(payload)
    return ClientRead.model_validate(client)


# PUBLIC_INTERFACE
@router.put(
    "/{client_id}",
    response_model=ClientRead,
    summary="Update client",
    description="Partial update; synced clients have the change pushed to the CRM.",
    dependencies=[Depends(get_current_active_user)],
)
async def update_client(
    payload: ClientUpdate,
    client_id: int = Path(..., description="Client ID"),
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> ClientRead:
    return ClientRead.model_validate(await ClientService(session, crm).update_client(client_id, payload))


# PUBLIC_INTERFACE
@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete client",
    dependencies=[Depends(require_admin)],
)
async def delete_client(
    client_id: int = Path(..., description="Client ID"),
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> Response:
    await ClientService(session, crm).delete_client(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUBLIC_INTERFACE
@router.post(
    "/{client_id}/sync-crm",
    response_model=ClientSyncResponse,
    summary="Sync client to CRM",
    description="Force a CRM sync. The outcome is reported in `crm`; provider errors do not raise.",
    dependencies=[Depends(get_current_active_user)],
)
async def sync_client(
    client_id: int = Path(..., description="Client ID"),
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> ClientSyncResponse:
    client, result = await ClientService(session, crm).sync_client(client_id)
    return ClientSyncResponse(client=ClientRead.model_validate(client), crm=result)


# PUBLIC_INTERFACE
@router.get(
    "/{client_id}/crm-contact",
    response_model=CRMContact,
    summary="Get CRM contact",
    description="Fetch the synced client's contact as the CRM currently holds it.",
    dependencies=[Depends(get_current_active_user)],
)
async def get_crm_contact(
    client_id: int = Path(..., description="Client ID"),
    session: AsyncSession = Depends(get_async_session),
    crm: CRMService = Depends(get_crm_service),
) -> CRMContact:
    return await ClientService(session, crm).get_crm_contact(client_id)
