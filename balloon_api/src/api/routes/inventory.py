from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user, require_inventory_writer
from src.db.models.enums import BalloonColor, InventoryStatus
from src.db.session import get_async_session
from src.schemas.inventory import (
    AvailabilityRequest,
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
    InventorySummary,
    RestockRequest,
    RestockResult,
)
from src.schemas.materials import AvailabilityReport
from src.services.inventory import InventoryService

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"],
    dependencies=[Depends(get_current_active_user)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[InventoryItemRead],
    summary="List inventory",
    description="List balloon stock ordered by color and size, optionally filtered by color or status.",
)
async def list_inventory(
    session: AsyncSession = Depends(get_async_session),
    color: Optional[BalloonColor] = Query(None, description="Filter by color"),
    status_filter: Optional[InventoryStatus] = Query(None, alias="status", description="Filter by stock status"),
) -> List[InventoryItemRead]:
    items = await InventoryService(session).list_items(color=color, status=status_filter)
    return [InventoryItemRead.model_validate(i) for i in items]


# PUBLIC_INTERFACE
@router.get(
    "/summary",
    response_model=InventorySummary,
    summary="Inventory summary",
    description="Counts per stock status and the items that are low or out of stock.",
)
async def inventory_summary(session: AsyncSession = Depends(get_async_session)) -> InventorySummary:
    return await InventoryService(session).summary()


# PUBLIC_INTERFACE
@router.post(
    "/check-availability",
    response_model=AvailabilityReport,
    summary="Check availability",
    description="Compare balloon counts per color ({small, large}) with stock.",
)
async def check_availability(
    payload: AvailabilityRequest,
    session: AsyncSession = Depends(get_async_session),
) -> AvailabilityReport:
    counts = {color: c.model_dump() for color, c in payload.balloon_counts.items()}
    return await InventoryService(session).check_availability(counts)


# PUBLIC_INTERFACE
@router.post(
    "/restock",
    response_model=RestockResult,
    summary="Restock",
    description="Add balloon counts to stock, creating missing color/size lines. Admin or inventory manager.",
    dependencies=[Depends(require_inventory_writer)],
)
async def restock_inventory(
    payload: RestockRequest,
    session: AsyncSession = Depends(get_async_session),
) -> RestockResult:
    counts = {color: c.model_dump() for color, c in payload.material_counts.items()}
    return await InventoryService(session).restock(counts)


# PUBLIC_INTERFACE
@router.get("/{item_id}", response_model=InventoryItemRead, summary="Get inventory item")
async def get_inventory_item(
    item_id: int = Path(..., description="Inventory item ID"),
    session: AsyncSession = Depends(get_async_session),
) -> InventoryItemRead:
    return InventoryItemRead.model_validate(await InventoryService(session).get_item(item_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=InventoryItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create inventory item",
    description="Create a stock line for a color and size. Status is derived. Admin or inventory manager.",
    dependencies=[Depends(require_inventory_writer)],
)
async def create_inventory_item(
    payload: InventoryItemCreate,
    session: AsyncSession = Depends(get_async_session),
) -> InventoryItemRead:
    return InventoryItemRead.model_validate(await InventoryService(session).create_item(payload))


# PUBLIC_INTERFACE
@router.patch(
    "/{item_id}",
    response_model=InventoryItemRead,
    summary="Update inventory item",
    description="Change quantity or threshold; status is recomputed. Admin or inventory manager.",
    dependencies=[Depends(require_inventory_writer)],
)
async def update_inventory_item(
    payload: InventoryItemUpdate,
    item_id: int = Path(..., description="Inventory item ID"),
    session: AsyncSession = Depends(get_async_session),
) -> InventoryItemRead:
    return InventoryItemRead.model_validate(await InventoryService(session).update_item(item_id, payload))
