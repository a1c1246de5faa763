from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from src.schemas.materials import BalloonCount


class DesignElement(BaseModel):
    """A balloon cluster positioned on the canvas."""
    id: str
    type: Literal["balloon-cluster"] = "balloon-cluster"
    template: Literal["classic", "arch", "column"] = "classic"
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rotation: float = 0
    svg_content: str = Field("", alias="svgContent")
    colors: List[str] = Field(default_factory=list)
    scale: Optional[float] = None

    class Config:
        populate_by_name = True


class MeasurementLine(BaseModel):
    """Ruler line drawn on the canvas with its real-world length."""
    id: str
    x1: float
    y1: float
    x2: float
    y2: float
    real_world_length: float = Field(..., alias="realWorldLength")
    unit: Literal["feet", "meters", "inches"]
    label: str = ""
    color: str = "#ff0000"

    class Config:
        populate_by_name = True


class DesignBase(BaseModel):
    client_name: str = Field("Anonymous Client")
    project_name: str = Field("Untitled Project")
    event_type: str = Field("Birthday")
    event_date: Optional[str] = None
    dimensions: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    background_url: Optional[str] = None
    client_id: Optional[int] = None
    elements: List[DesignElement] = Field(default_factory=list)
    measurements: List[MeasurementLine] = Field(default_factory=list)
    scale: float = Field(1.0, gt=0)


class DesignCreate(DesignBase):
    """Create payload. Derived material fields are computed from elements."""


class DesignUpdate(BaseModel):
    """Partial update; only these fields may change."""
    client_name: Optional[str] = None
    project_name: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[str] = None
    dimensions: Optional[str] = None
    notes: Optional[str] = None
    background_url: Optional[str] = None
    image_url: Optional[str] = None
    elements: Optional[List[DesignElement]] = None
    measurements: Optional[List[MeasurementLine]] = None
    scale: Optional[float] = Field(None, gt=0)


class DesignRead(BaseModel):
    """Read model for a design including derived material data."""
    id: int
    user_id: int
    client_id: Optional[int] = None
    client_name: str
    project_name: str
    event_type: str
    event_date: Optional[str] = None
    dimensions: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    background_url: Optional[str] = None
    elements: List[Dict[str, Any]] = Field(default_factory=list)
    measurements: List[Dict[str, Any]] = Field(default_factory=list)
    scale: float
    color_analysis: Dict[str, Any] = Field(default_factory=dict)
    material_requirements: Dict[str, Any] = Field(default_factory=dict)
    total_balloons: int
    estimated_clusters: int
    production_time: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryCheckRequest(BaseModel):
    """Optional override of the requirements to check."""
    material_requirements: Optional[Dict[str, BalloonCount]] = None


class DesignAccessoryCreate(BaseModel):
    accessory_id: int
    quantity: int = Field(1, ge=1)


class DesignAccessoryRead(BaseModel):
    id: int
    design_id: int
    accessory_id: int
    name: str
    quantity: int
