from __future__ import annotations

import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    DESIGNER = "designer"
    INVENTORY_MANAGER = "inventory_manager"


class BalloonColor(str, enum.Enum):
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"
    PINK = "pink"
    ORANGE = "orange"
    WHITE = "white"
    BLACK = "black"
    SILVER = "silver"
    GOLD = "gold"


class BalloonSize(str, enum.Enum):
    """Stocked latex sizes. 11" balloons are the "small" size, 16" the "large" size."""
    SMALL = "11inch"
    LARGE = "16inch"


class InventoryStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


class ProductionStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


def enum_column(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """Portable (VARCHAR-backed) enum column type storing member values."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
