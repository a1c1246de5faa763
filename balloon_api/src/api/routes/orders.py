from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user, require_inventory_writer
from src.db.models.security import User
from src.db.session import get_async_session
from src.schemas.orders import (
    BalloonOrderRequest,
    OrderCreate,
    OrderDetail,
    OrderItemCreate,
    OrderRead,
    OrderUpdate,
)
from src.services.orders import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


# PUBLIC_INTERFACE
@router.get("", response_model=List[OrderRead], summary="List my orders")
async def list_orders(
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> List[OrderRead]:
    return [OrderRead.model_validate(o) for o in await OrderService(session).list_orders(user)]


# PUBLIC_INTERFACE
@router.get("/design/{design_id}", response_model=List[OrderRead], summary="List orders for design")
async def list_orders_for_design(
    design_id: int = Path(..., description="Design ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> List[OrderRead]:
    orders = await OrderService(session).list_for_design(design_id, user)
    return [OrderRead.model_validate(o) for o in orders]


# PUBLIC_INTERFACE
@router.post(
    "/balloon",
    response_model=OrderDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Quick balloon order",
    description="Order one balloon color and size (quantity 1-100) at the supplier unit price.",
)
async def create_balloon_order(
    payload: BalloonOrderRequest,
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderDetail:
    return await OrderService(session).create_balloon_order(payload, user)


# PUBLIC_INTERFACE
@router.get("/{order_id}", response_model=OrderDetail, summary="Get order with items")
async def get_order(
    order_id: int = Path(..., description="Order ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderDetail:
    return await OrderService(session).get_order_detail(order_id, user)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create order",
    description="Create an order header; totals start at zero and follow the items.",
)
async def create_order(
    payload: OrderCreate,
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderRead:
    return OrderRead.model_validate(await OrderService(session).create_order(payload, user))


# PUBLIC_INTERFACE
@router.post(
    "/{order_id}/items",
    response_model=OrderDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Add order item",
    description="Add a line; its subtotal and the order totals are recomputed.",
)
async def add_order_item(
    payload: OrderItemCreate,
    order_id: int = Path(..., description="Order ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderDetail:
    return await OrderService(session).add_item(order_id, payload, user)


# PUBLIC_INTERFACE
@router.patch("/{order_id}", response_model=OrderRead, summary="Update order")
async def update_order(
    payload: OrderUpdate,
    order_id: int = Path(..., description="Order ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> OrderRead:
    return OrderRead.model_validate(await OrderService(session).update_order(order_id, payload, user))


# PUBLIC_INTERFACE
@router.post(
    "/{order_id}/receive",
    response_model=OrderDetail,
    summary="Receive order",
    description="Add every balloon line to inventory and mark the order completed. Admin or inventory manager.",
)
async def receive_order(
    order_id: int = Path(..., description="Order ID"),
    user: User = Depends(require_inventory_writer),
    session: AsyncSession = Depends(get_async_session),
) -> OrderDetail:
    return await OrderService(session).receive_order(order_id, user)
