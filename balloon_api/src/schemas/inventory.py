from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from src.db.models.enums import BalloonColor, BalloonSize, InventoryStatus
from src.schemas.materials import BalloonCount


class InventoryItemRead(BaseModel):
    """Read model for a balloon stock line."""
    id: int = Field(..., description="Inventory item ID")
    color: BalloonColor = Field(..., description="Balloon color")
    size: BalloonSize = Field(..., description="Balloon size")
    quantity: int = Field(..., description="Quantity on hand")
    threshold: int = Field(..., description="Low-stock threshold")
    status: InventoryStatus = Field(..., description="Derived stock status")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True


class InventoryItemCreate(BaseModel):
    """Create payload; status is always derived."""
    color: BalloonColor
    size: BalloonSize
    quantity: int = Field(0, ge=0)
    threshold: int = Field(20, ge=0)


class InventoryItemUpdate(BaseModel):
    quantity: Optional[int] = Field(None, ge=0)
    threshold: Optional[int] = Field(None, ge=0)


class InventorySummary(BaseModel):
    """Stock overview: counts per status and the items needing a restock."""
    total_items: int
    status_counts: Dict[str, int]
    to_restock: List[InventoryItemRead] = Field(default_factory=list)


class AvailabilityRequest(BaseModel):
    """Balloon counts per color to check against stock."""
    balloon_counts: Dict[str, BalloonCount] = Field(..., description="color -> {small, large}")


class RestockRequest(BaseModel):
    """Balloon counts per color to add to stock."""
    material_counts: Dict[str, BalloonCount] = Field(..., description="color -> {small, large}")


class RestockResult(BaseModel):
    updated: List[InventoryItemRead] = Field(default_factory=list)
    created: List[InventoryItemRead] = Field(default_factory=list)
    message: str


class AccessoryRead(BaseModel):
    """Read model for an accessory."""
    id: int = Field(..., description="Accessory ID")
    name: str = Field(..., description="Accessory name")
    quantity: int = Field(..., description="Quantity on hand")
    threshold: int = Field(..., description="Low-stock threshold")
    status: InventoryStatus = Field(..., description="Derived stock status")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True


class AccessoryCreate(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: int = Field(0, ge=0)
    threshold: int = Field(5, ge=0)


class AccessoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=0)
    threshold: Optional[int] = Field(None, ge=0)
