from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user
from src.db.models.security import User
from src.db.session import get_async_session
from src.schemas.designs import (
    DesignAccessoryCreate,
    DesignAccessoryRead,
    DesignCreate,
    DesignRead,
    DesignUpdate,
    InventoryCheckRequest,
)
from src.schemas.materials import AvailabilityReport, MaterialSummary
from src.schemas.orders import OrderDetail
from src.services.designs import DesignService
from src.services.orders import OrderService

router = APIRouter(prefix="/designs", tags=["Designs"])


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[DesignRead],
    summary="List designs",
    description="List the current user's designs, newest first. Admins may pass all=true to list every design.",
)
async def list_designs(
    include_all: bool = Query(False, alias="all", description="Admin only: include every user's designs"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> List[DesignRead]:
    designs = await DesignService(session).list_designs(user, include_all=include_all)
    return [DesignRead.model_validate(d) for d in designs]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=DesignRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create design",
    description="Persist a design. Material requirements, color analysis and totals are derived from its elements.",
)
async def create_design(
    payload: DesignCreate,
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> DesignRead:
    design = await DesignService(session).create_design(payload, user)
    return DesignRead.model_validate(design)


# PUBLIC_INTERFACE
@router.get("/{design_id}", response_model=DesignRead, summary="Get design")
async def get_design(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> DesignRead:
    return DesignRead.model_validate(await DesignService(session).get_design(design_id, user))


# PUBLIC_INTERFACE
@router.patch(
    "/{design_id}",
    response_model=DesignRead,
    summary="Update design",
    description="Partial update (owner or admin). Changing elements recomputes the material requirements.",
)
async def update_design(
    payload: DesignUpdate,
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> DesignRead:
    design = await DesignService(session).update_design(design_id, payload, user)
    return DesignRead.model_validate(design)


# PUBLIC_INTERFACE
@router.delete("/{design_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete design")
async def delete_design(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> None:
    await DesignService(session).delete_design(design_id, user)


# PUBLIC_INTERFACE
@router.post(
    "/{design_id}/analyze",
    response_model=DesignRead,
    summary="Analyze design",
    description="Recompute and store the design's material requirements, color analysis and production time.",
)
async def analyze_design(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> DesignRead:
    return DesignRead.model_validate(await DesignService(session).analyze(design_id, user))


# PUBLIC_INTERFACE
@router.get(
    "/{design_id}/materials",
    response_model=MaterialSummary,
    summary="Design materials",
    description="Balloon counts per color and size for the stored elements.",
)
async def design_materials(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> MaterialSummary:
    return await DesignService(session).materials(design_id, user)


# PUBLIC_INTERFACE
@router.post(
    "/{design_id}/check-inventory",
    response_model=AvailabilityReport,
    summary="Check inventory for design",
    description="Compare the design's requirements, or a material_requirements override, with stock.",
)
async def check_design_inventory(
    design_id: int = Path(..., description="Design ID"),
    payload: Optional[InventoryCheckRequest] = Body(None),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> AvailabilityReport:
    override = None
    if payload is not None and payload.material_requirements is not None:
        override = {color: counts.model_dump() for color, counts in payload.material_requirements.items()}
    return await DesignService(session).check_inventory(design_id, user, override)


# PUBLIC_INTERFACE
@router.post(
    "/{design_id}/order-shortages",
    response_model=OrderDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Order shortages",
    description='Create a supplier order for every short color and size (11" at 199 cents, 16" at 299 cents).',
)
async def order_design_shortages(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderDetail:
    order = await DesignService(session).order_shortages(design_id, user)
    return await OrderService(session).to_detail(order)


# PUBLIC_INTERFACE
@router.post(
    "/{design_id}/accessories",
    response_model=DesignAccessoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Attach accessory",
    description="Attach an accessory to a design; attaching the same accessory again adds to its quantity.",
)
async def add_design_accessory(
    payload: DesignAccessoryCreate,
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> DesignAccessoryRead:
    return await DesignService(session).add_accessory(design_id, payload, user)


# PUBLIC_INTERFACE
@router.get(
    "/{design_id}/accessories",
    response_model=List[DesignAccessoryRead],
    summary="List design accessories",
)
async def list_design_accessories(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> List[DesignAccessoryRead]:
    return await DesignService(session).list_accessories(design_id, user)
