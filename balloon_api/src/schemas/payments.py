from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.db.models.enums import PaymentStatus


class PaymentIntentCreate(BaseModel):
    amount: int = Field(..., gt=0, description="Amount in cents")
    design_id: Optional[int] = None
    client_name: Optional[str] = None


class PaymentRead(BaseModel):
    """Read model for a payment intent."""
    id: int
    reference: str = Field(..., description="Intent reference, pi_<hex>")
    user_id: int
    design_id: Optional[int] = None
    client_name: str
    amount: int = Field(..., description="Cents")
    currency: str
    status: PaymentStatus
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
