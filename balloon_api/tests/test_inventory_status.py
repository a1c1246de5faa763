from types import SimpleNamespace

from src.db.models.enums import InventoryStatus
from src.services.inventory_status import (
    apply_status,
    calculate_inventory_status,
    items_to_restock,
    status_counts,
)


def test_status_boundaries():
    assert calculate_inventory_status(0, 20) == InventoryStatus.OUT_OF_STOCK
    assert calculate_inventory_status(-3, 20) == InventoryStatus.OUT_OF_STOCK
    assert calculate_inventory_status(1, 20) == InventoryStatus.LOW_STOCK
    assert calculate_inventory_status(20, 20) == InventoryStatus.LOW_STOCK
    assert calculate_inventory_status(21, 20) == InventoryStatus.IN_STOCK


def test_apply_status_sets_the_attribute():
    item = SimpleNamespace(quantity=5, threshold=10, status=InventoryStatus.IN_STOCK)
    assert apply_status(item) is item
    assert item.status == InventoryStatus.LOW_STOCK


def test_counts_include_every_status():
    items = [
        SimpleNamespace(quantity=0, threshold=5),
        SimpleNamespace(quantity=50, threshold=5),
        SimpleNamespace(quantity=60, threshold=5),
    ]
    assert status_counts(items) == {"in_stock": 2, "low_stock": 0, "out_of_stock": 1}


def test_restock_list_excludes_healthy_items():
    empty = SimpleNamespace(quantity=0, threshold=5)
    low = SimpleNamespace(quantity=3, threshold=5)
    healthy = SimpleNamespace(quantity=30, threshold=5)
    assert items_to_restock([healthy, low, empty]) == [empty, low]
