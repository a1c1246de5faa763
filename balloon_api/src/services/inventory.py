from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import ConflictError, DomainError, InsufficientInventoryError, NotFoundError
from src.core.settings import get_app_settings
from src.db.models.enums import BalloonColor, BalloonSize, InventoryStatus
from src.db.models.inventory import Accessory, InventoryItem
from src.repositories.inventory import AccessoryRepository, InventoryRepository
from src.schemas.inventory import (
    AccessoryCreate,
    AccessoryUpdate,
    InventoryItemCreate,
    InventoryItemRead,
    InventoryItemUpdate,
    InventorySummary,
    RestockResult,
)
from src.schemas.materials import AvailabilityReport
from src.services.base import BaseService
from src.services.inventory_status import apply_status, items_to_restock, status_counts
from src.services.materials import SIZE_FOR_KEY, compare_with_inventory, is_stocked_color, normalize_color

logger = logging.getLogger(__name__)


def requirement_lines(requirements: Mapping[str, Any]) -> List[Tuple[str, str, int]]:
    """Flatten color -> {small, large} into (color, size, quantity) lines with quantity > 0."""
    lines: List[Tuple[str, str, int]] = []
    for raw_color, counts in (requirements or {}).items():
        color = normalize_color(raw_color)
        if not color:
            continue
        for key, size in SIZE_FOR_KEY.items():
            qty = counts.get(key, 0) if isinstance(counts, Mapping) else getattr(counts, key, 0)
            if qty and int(qty) > 0:
                lines.append((color, size, int(qty)))
    return lines


class InventoryService(BaseService):
    """Balloon stock and accessories. Status is always derived, never client-supplied."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.items = InventoryRepository(session)
        self.accessories = AccessoryRepository(session)

    # Balloons

    async def list_items(
        self, *, color: Optional[BalloonColor] = None, status: Optional[InventoryStatus] = None
    ) -> List[InventoryItem]:
        return await self.items.list_items(color=color, status=status)

    async def get_item(self, item_id: int) -> InventoryItem:
        item = await self.items.get_item(item_id)
        if not item:
            raise NotFoundError("Inventory item not found")
        return item

    async def summary(self) -> InventorySummary:
        items = await self.items.list_items()
        return InventorySummary(
            total_items=len(items),
            status_counts=status_counts(items),
            to_restock=[InventoryItemRead.model_validate(i) for i in items_to_restock(items)],
        )

    # PUBLIC_INTERFACE
    async def create_item(self, payload: InventoryItemCreate) -> InventoryItem:
        """Create a stock line; a second line for the same (color, size) is rejected."""
        if await self.items.get_by_color_size(payload.color.value, payload.size.value):
            raise ConflictError(
                f"Inventory item for {payload.color.value} {payload.size.value} already exists"
            )
        item = apply_status(
            InventoryItem(
                color=payload.color,
                size=payload.size,
                quantity=payload.quantity,
                threshold=payload.threshold,
            )
        )
        await self.items.add(item)
        await self.commit_and_refresh(item)
        logger.info("Created inventory item %s %s qty=%s", item.color.value, item.size.value, item.quantity)
        return item

    async def update_item(self, item_id: int, payload: InventoryItemUpdate) -> InventoryItem:
        item = await self.get_item(item_id)
        for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(item, field, value)
        apply_status(item)
        await self.commit_and_refresh(item)
        return item

    async def check_availability(self, requirements: Mapping[str, Any]) -> AvailabilityReport:
        inventory = await self.items.list_items()
        return compare_with_inventory(requirements, inventory)

    async def add_stock(self, color: str, size: str, quantity: int) -> Tuple[InventoryItem, bool]:
        """
        Add quantity to a stock line without committing.

        Missing (color, size) lines are created with the default threshold.
        Returns the item and whether it was created.
        """
        key = normalize_color(color)
        if not is_stocked_color(key):
            raise DomainError(f"Unknown balloon color: {color}")
        if size not in SIZE_FOR_KEY.values():
            raise DomainError(f"Unknown balloon size: {size}")

        item = await self.items.get_by_color_size(key, size)
        created = item is None
        if created:
            item = InventoryItem(
                color=BalloonColor(key),
                size=BalloonSize(size),
                quantity=0,
                threshold=get_app_settings().DEFAULT_INVENTORY_THRESHOLD,
            )
            await self.items.add(item)
        item.quantity += quantity
        apply_status(item)
        await self.items.flush()
        return item, created

    # PUBLIC_INTERFACE
    async def restock(self, material_counts: Mapping[str, Any]) -> RestockResult:
        """Add the given balloon counts to stock in one transaction."""
        updated: List[InventoryItem] = []
        created: List[InventoryItem] = []
        try:
            for color, size, qty in requirement_lines(material_counts):
                item, was_created = await self.add_stock(color, size, qty)
                (created if was_created else updated).append(item)
            await self.commit_and_refresh(*updated, *created)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Restocked %d existing and %d new inventory items", len(updated), len(created))
        return RestockResult(
            updated=[InventoryItemRead.model_validate(i) for i in updated],
            created=[InventoryItemRead.model_validate(i) for i in created],
            message=f"Restocked {len(updated) + len(created)} inventory item(s)",
        )

    async def consume(self, requirements: Mapping[str, Any]) -> List[InventoryItem]:
        """
        Decrement stock for every requirement line without committing.

        All lines are checked before any is consumed; if one is short the whole
        request is rejected with the list of insufficient items.
        """
        lines = requirement_lines(requirements)
        resolved: List[Tuple[InventoryItem, int]] = []
        insufficient: List[Dict[str, Any]] = []
        for color, size, qty in lines:
            item = (
                await self.items.get_by_color_size(color, size)
                if is_stocked_color(color)
                else None
            )
            available = item.quantity if item else 0
            if item is None or available < qty:
                insufficient.append(
                    {"color": color, "size": size, "required": qty, "available": available}
                )
            else:
                resolved.append((item, qty))

        if insufficient:
            raise InsufficientInventoryError("Insufficient inventory", details=insufficient)

        for item, qty in resolved:
            item.quantity -= qty
            apply_status(item)
        return [item for item, _ in resolved]

    # Accessories

    async def list_accessories(self) -> List[Accessory]:
        return await self.accessories.list_accessories()

    async def get_accessory(self, accessory_id: int) -> Accessory:
        accessory = await self.accessories.get_accessory(accessory_id)
        if not accessory:
            raise NotFoundError("Accessory not found")
        return accessory

    async def create_accessory(self, payload: AccessoryCreate) -> Accessory:
        accessory = apply_status(
            Accessory(name=payload.name, quantity=payload.quantity, threshold=payload.threshold)
        )
        await self.accessories.add(accessory)
        await self.commit_and_refresh(accessory)
        return accessory

    async def update_accessory(self, accessory_id: int, payload: AccessoryUpdate) -> Accessory:
        accessory = await self.get_accessory(accessory_id)
        for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(accessory, field, value)
        apply_status(accessory)
        await self.commit_and_refresh(accessory)
        return accessory
