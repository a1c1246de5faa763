"""
ORM models for the studio domain: users, clients, designs, inventory,
production, supplier orders and payments.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .enums import (  # noqa: F401
    BalloonColor,
    BalloonSize,
    InventoryStatus,
    OrderStatus,
    PaymentStatus,
    ProductionStatus,
    UserRole,
)
from .security import User  # noqa: F401
from .clients import Client  # noqa: F401
from .designs import Design  # noqa: F401
from .inventory import (  # noqa: F401
    Accessory,
    DesignAccessory,
    InventoryItem,
)
from .production import Production  # noqa: F401
from .orders import (  # noqa: F401
    Order,
    OrderItem,
)
from .payments import Payment  # noqa: F401
