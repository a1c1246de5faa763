from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from src.db.models.enums import BalloonColor, BalloonSize, OrderStatus
from src.services.materials import is_stocked_color, normalize_color


class OrderCreate(BaseModel):
    """Order header; totals start at zero and follow the items."""
    design_id: Optional[int] = None
    supplier_name: Optional[str] = None
    expected_delivery_date: Optional[date] = None
    priority: str = Field("normal")
    notes: Optional[str] = None


class OrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    notes: Optional[str] = None
    supplier_name: Optional[str] = None
    expected_delivery_date: Optional[date] = None
    priority: Optional[str] = None


class OrderItemCreate(BaseModel):
    """Order line. Balloon lines must name a stocked color and size."""
    inventory_type: str = Field("balloon")
    color: str = Field(..., min_length=1)
    size: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    unit_price: int = Field(0, ge=0, description="Cents")

    @model_validator(mode="after")
    def check_balloon_line(self) -> "OrderItemCreate":
        if self.inventory_type != "balloon":
            return self
        color = normalize_color(self.color)
        if not is_stocked_color(color):
            raise ValueError(f"Unknown balloon color: {self.color}")
        if self.size not in BalloonSize._value2member_map_:
            raise ValueError(f"Unknown balloon size: {self.size}")
        self.color = color
        return self


class BalloonOrderRequest(BaseModel):
    """Quick order of a single balloon color and size."""
    color: BalloonColor
    size: BalloonSize
    quantity: int = Field(..., ge=1, le=100)
    design_id: Optional[int] = None
    supplier_name: Optional[str] = None
    notes: Optional[str] = None


class OrderItemRead(BaseModel):
    id: int
    order_id: int
    inventory_type: str
    color: str
    size: str
    quantity: int
    unit_price: int
    subtotal: int

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    """Read model for an order header."""
    id: int
    user_id: int
    design_id: Optional[int] = None
    status: OrderStatus
    supplier_name: Optional[str] = None
    expected_delivery_date: Optional[date] = None
    priority: str
    notes: Optional[str] = None
    total_quantity: int
    total_cost: int = Field(..., description="Cents")
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderDetail(OrderRead):
    items: List[OrderItemRead] = Field(default_factory=list)
