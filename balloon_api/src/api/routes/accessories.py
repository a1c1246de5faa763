from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user, require_inventory_writer
from src.db.session import get_async_session
from src.schemas.inventory import AccessoryCreate, AccessoryRead, AccessoryUpdate
from src.services.inventory import InventoryService

router = APIRouter(
    prefix="/accessories",
    tags=["Accessories"],
    dependencies=[Depends(get_current_active_user)],
)


# PUBLIC_INTERFACE
@router.get("", response_model=List[AccessoryRead], summary="List accessories")
async def list_accessories(session: AsyncSession = Depends(get_async_session)) -> List[AccessoryRead]:
    return [AccessoryRead.model_validate(a) for a in await InventoryService(session).list_accessories()]


# PUBLIC_INTERFACE
@router.get("/{accessory_id}", response_model=AccessoryRead, summary="Get accessory")
async def get_accessory(
    accessory_id: int = Path(..., description="Accessory ID"),
    session: AsyncSession = Depends(get_async_session),
) -> AccessoryRead:
    return AccessoryRead.model_validate(await InventoryService(session).get_accessory(accessory_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=AccessoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create accessory",
    dependencies=[Depends(require_inventory_writer)],
)
async def create_accessory(
    payload: AccessoryCreate,
    session: AsyncSession = Depends(get_async_session),
) -> AccessoryRead:
    return AccessoryRead.model_validate(await InventoryService(session).create_accessory(payload))


# PUBLIC_INTERFACE
@router.patch(
    "/{accessory_id}",
    response_model=AccessoryRead,
    summary="Update accessory",
    description="Status is recomputed from quantity and threshold.",
    dependencies=[Depends(require_inventory_writer)],
)
async def update_accessory(
    payload: AccessoryUpdate,
    accessory_id: int = Path(..., description="Accessory ID"),
    session: AsyncSession = Depends(get_async_session),
) -> AccessoryRead:
    return AccessoryRead.model_validate(await InventoryService(session).update_accessory(accessory_id, payload))
