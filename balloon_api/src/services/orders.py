from __future__ import annotations

import logging
from typing import Any, Iterable, List

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InvalidStateError, NotFoundError
from src.db.models.enums import BalloonSize, OrderStatus
from src.db.models.orders import Order, OrderItem
from src.repositories.orders import OrderRepository
from src.schemas.materials import ShortageLine
from src.schemas.orders import BalloonOrderRequest, OrderCreate, OrderDetail, OrderItemCreate, OrderItemRead, OrderUpdate
from src.services.base import BaseService
from src.services.inventory import InventoryService
from src.services.materials import SIZE_FOR_KEY, is_stocked_color, normalize_color

logger = logging.getLogger(__name__)

# Supplier unit prices in cents
BALLOON_UNIT_PRICES = {
    BalloonSize.SMALL.value: 199,
    BalloonSize.LARGE.value: 299,
}
BALLOON_ITEM = "balloon"


def unit_price_for(size: str) -> int:
    return BALLOON_UNIT_PRICES.get(str(size), 0)


class OrderService(BaseService):
    """Supplier orders. Order totals always equal the sums over the order's items."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.orders = OrderRepository(session)

    async def list_orders(self, user: Any) -> List[Order]:
        return await self.orders.list_orders(user_id=user.id)

    async def list_for_design(self, design_id: int, user: Any) -> List[Order]:
        await self.ensure_design_access(design_id, user)
        return await self.orders.list_orders(design_id=design_id)

    async def get_order(self, order_id: int, user: Any) -> Order:
        order = await self.orders.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        self.ensure_owner_or_admin(order.user_id, user, "order")
        return order

    async def get_order_detail(self, order_id: int, user: Any) -> OrderDetail:
        order = await self.get_order(order_id, user)
        return await self.to_detail(order)

    async def to_detail(self, order: Order) -> OrderDetail:
        items = await self.orders.list_items(order.id)
        detail = OrderDetail.model_validate(order)
        detail.items = [OrderItemRead.model_validate(i) for i in items]
        return detail

    async def _new_order(self, payload: OrderCreate, user: Any) -> Order:
        await self.ensure_design_access(payload.design_id, user)
        order = Order(
            user_id=user.id,
            design_id=payload.design_id,
            status=OrderStatus.PENDING,
            supplier_name=payload.supplier_name,
            expected_delivery_date=payload.expected_delivery_date,
            priority=payload.priority or "normal",
            notes=payload.notes,
            total_quantity=0,
            total_cost=0,
        )
        await self.orders.add(order)
        await self.orders.flush()
        return order

    async def _add_items(self, order: Order, items: Iterable[OrderItemCreate]) -> None:
        for item in items:
            await self.orders.add(
                OrderItem(
                    order_id=order.id,
                    inventory_type=item.inventory_type,
                    color=item.color,
                    size=item.size,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.quantity * item.unit_price,
                )
            )
        await self.orders.flush()
        await self._recompute_totals(order)

    async def _recompute_totals(self, order: Order) -> None:
        items = await self.orders.list_items(order.id)
        order.total_quantity = sum(i.quantity for i in items)
        order.total_cost = sum(i.subtotal for i in items)

    # PUBLIC_INTERFACE
    async def create_order(self, payload: OrderCreate, user: Any) -> Order:
        """Create an empty order header; totals start at zero."""
        order = await self._new_order(payload, user)
        await self.commit_and_refresh(order)
        logger.info("Created order %s", order.id)
        return order

    # PUBLIC_INTERFACE
    async def add_item(self, order_id: int, payload: OrderItemCreate, user: Any) -> OrderDetail:
        """Add a line to an order and recompute its totals."""
        order = await self.get_order(order_id, user)
        if order.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
            raise InvalidStateError(f"Cannot add items to a {order.status.value} order")
        await self._add_items(order, [payload])
        await self.commit_and_refresh(order)
        return await self.to_detail(order)

    async def update_order(self, order_id: int, payload: OrderUpdate, user: Any) -> Order:
        order = await self.get_order(order_id, user)
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k not in ("status", "priority")
        }
        if not changes:
            raise InvalidStateError("No valid fields to update")
        for field, value in changes.items():
            setattr(order, field, value)
        await self.commit_and_refresh(order)
        return order

    # PUBLIC_INTERFACE
    async def create_balloon_order(self, payload: BalloonOrderRequest, user: Any) -> OrderDetail:
        """Quick order of one balloon color and size at the supplier unit price."""
        order = await self._new_order(
            OrderCreate(design_id=payload.design_id, supplier_name=payload.supplier_name, notes=payload.notes),
            user,
        )
        await self._add_items(
            order,
            [
                OrderItemCreate(
                    inventory_type=BALLOON_ITEM,
                    color=payload.color.value,
                    size=payload.size.value,
                    quantity=payload.quantity,
                    unit_price=unit_price_for(payload.size.value),
                )
            ],
        )
        await self.commit_and_refresh(order)
        return await self.to_detail(order)

    async def create_shortage_order(self, design_id: int, shortages: Iterable[ShortageLine], user: Any) -> Order:
        """
        Order exactly the missing quantity of every short (color, size).

        Lines in colors or sizes the supplier does not stock are left out and
        listed in the order notes. If nothing stockable is short the request is
        rejected.
        """
        stockable: List[ShortageLine] = []
        skipped: List[ShortageLine] = []
        for line in shortages:
            if line.shortage <= 0:
                continue
            if is_stocked_color(normalize_color(line.color)) and line.size in SIZE_FOR_KEY.values():
                stockable.append(line)
            else:
                skipped.append(line)
        if not stockable:
            raise InvalidStateError("No stockable shortages to order for this design")

        notes = f"Shortage order for design #{design_id}"
        if skipped:
            notes += ". Skipped unstocked colors: " + ", ".join(f"{s.color} {s.size}" for s in skipped)
            logger.warning("Shortage order for design %s skipped %d unstocked line(s)", design_id, len(skipped))

        order = await self._new_order(OrderCreate(design_id=design_id, notes=notes), user)
        await self._add_items(
            order,
            [
                OrderItemCreate(
                    inventory_type=BALLOON_ITEM,
                    color=line.color,
                    size=line.size,
                    quantity=line.shortage,
                    unit_price=unit_price_for(line.size),
                )
                for line in stockable
            ],
        )
        await self.commit_and_refresh(order)
        logger.info("Created shortage order %s for design %s", order.id, design_id)
        return order

    # PUBLIC_INTERFACE
    async def receive_order(self, order_id: int, user: Any) -> OrderDetail:
        """Add every balloon line to stock and complete the order, in one transaction."""
        order = await self.orders.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        if order.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
            raise InvalidStateError(f"Order is already {order.status.value}")

        inventory = InventoryService(self.session)
        try:
            for item in await self.orders.list_items(order.id):
                if item.inventory_type == BALLOON_ITEM:
                    await inventory.add_stock(item.color, item.size, item.quantity)
            order.status = OrderStatus.COMPLETED
            await self.commit_and_refresh(order)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Received order %s into inventory", order.id)
        return await self.to_detail(order)
