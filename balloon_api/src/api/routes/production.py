from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user
from src.db.models.enums import ProductionStatus
from src.db.models.security import User
from src.db.session import get_async_session
from src.schemas.production import ProductionComplete, ProductionCreate, ProductionRead, ProductionUpdate
from src.services.production import ProductionService

router = APIRouter(
    prefix="/production",
    tags=["Production"],
    dependencies=[Depends(get_current_active_user)],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ProductionRead],
    summary="List production",
    description="List production records newest first, optionally filtered by status.",
)
async def list_production(
    session: AsyncSession = Depends(get_async_session),
    status_filter: Optional[ProductionStatus] = Query(None, alias="status", description="Filter by status"),
) -> List[ProductionRead]:
    runs = await ProductionService(session).list_production(status=status_filter)
    return [ProductionRead.model_validate(r) for r in runs]


# PUBLIC_INTERFACE
@router.get("/design/{design_id}", response_model=List[ProductionRead], summary="List production for design")
async def list_production_for_design(
    design_id: int = Path(..., description="Design ID"),
    session: AsyncSession = Depends(get_async_session),
) -> List[ProductionRead]:
    runs = await ProductionService(session).list_for_design(design_id)
    return [ProductionRead.model_validate(r) for r in runs]


# PUBLIC_INTERFACE
@router.get("/{production_id}", response_model=ProductionRead, summary="Get production record")
async def get_production(
    production_id: int = Path(..., description="Production ID"),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRead:
    return ProductionRead.model_validate(await ProductionService(session).get_production(production_id))


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=ProductionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Start production",
    description=(
        "Create a production record for a design (owner or admin). Every material requirement is "
        "checked first; if any is short, nothing is consumed and the insufficient items are returned. "
        "Otherwise inventory is decremented and the record created in one transaction."
    ),
)
async def create_production(
    payload: ProductionCreate,
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRead:
    run = await ProductionService(session).create_production(payload, user)
    return ProductionRead.model_validate(run)


# PUBLIC_INTERFACE
@router.patch("/{production_id}", response_model=ProductionRead, summary="Update production record")
async def update_production(
    payload: ProductionUpdate,
    production_id: int = Path(..., description="Production ID"),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRead:
    run = await ProductionService(session).update_production(production_id, payload)
    return ProductionRead.model_validate(run)


# PUBLIC_INTERFACE
@router.patch(
    "/{production_id}/complete",
    response_model=ProductionRead,
    summary="Complete production",
    description="Set status completed, completion date now and the actual time spent (default 'Unknown').",
)
async def complete_production(
    production_id: int = Path(..., description="Production ID"),
    payload: Optional[ProductionComplete] = Body(None),
    session: AsyncSession = Depends(get_async_session),
) -> ProductionRead:
    actual_time = payload.actual_time if payload else None
    run = await ProductionService(session).complete_production(production_id, actual_time)
    return ProductionRead.model_validate(run)
