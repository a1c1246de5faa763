from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.db.models.enums import ProductionStatus


class ProductionCreate(BaseModel):
    """Start production of a design; consumes the design's balloons from stock."""
    design_id: int = Field(..., description="Design to produce")
    status: ProductionStatus = Field(ProductionStatus.PENDING)
    start_date: Optional[datetime] = Field(None)
    notes: Optional[str] = Field(None)


class ProductionUpdate(BaseModel):
    status: Optional[ProductionStatus] = None
    start_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    actual_time: Optional[str] = None
    notes: Optional[str] = None


class ProductionComplete(BaseModel):
    actual_time: Optional[str] = Field(None, description="Time actually spent, e.g. '3.5 hrs'")


class ProductionRead(BaseModel):
    """Read model for a production record."""
    id: int = Field(..., description="Production ID")
    design_id: int = Field(..., description="Design ID")
    status: ProductionStatus = Field(..., description="Status")
    start_date: Optional[datetime] = Field(None)
    completion_date: Optional[datetime] = Field(None)
    actual_time: Optional[str] = Field(None)
    notes: Optional[str] = Field(None)
    created_at: datetime = Field(..., description="Created timestamp")
    updated_at: datetime = Field(..., description="Updated timestamp")

    class Config:
        from_attributes = True
