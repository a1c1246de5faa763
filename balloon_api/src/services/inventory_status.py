"""Stock status rules shared by balloon inventory and accessories."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from src.db.models.enums import InventoryStatus


# PUBLIC_INTERFACE
def calculate_inventory_status(quantity: int, threshold: int) -> InventoryStatus:
    """out_of_stock when quantity <= 0, low_stock when 0 < quantity <= threshold, else in_stock."""
    if quantity <= 0:
        return InventoryStatus.OUT_OF_STOCK
    if quantity <= threshold:
        return InventoryStatus.LOW_STOCK
    return InventoryStatus.IN_STOCK


def apply_status(item: Any) -> Any:
    """Recompute and set item.status from its quantity and threshold."""
    item.status = calculate_inventory_status(item.quantity, item.threshold)
    return item


# PUBLIC_INTERFACE
def status_counts(items: Iterable[Any]) -> Dict[str, int]:
    """Number of items per status; every status is present in the result."""
    counts = {s.value: 0 for s in InventoryStatus}
    for item in items:
        counts[calculate_inventory_status(item.quantity, item.threshold).value] += 1
    return counts


# PUBLIC_INTERFACE
def items_to_restock(items: Iterable[Any]) -> List[Any]:
    """Items that are low or out of stock, emptiest first."""
    pending = [
        item
        for item in items
        if calculate_inventory_status(item.quantity, item.threshold) != InventoryStatus.IN_STOCK
    ]
    return sorted(pending, key=lambda i: (i.quantity, getattr(i, "id", 0) or 0))
