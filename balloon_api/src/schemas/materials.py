from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ColorCount(BaseModel):
    """Balloons of one color split by size. small = 11", large = 16"."""
    small: int = Field(0, ge=0)
    large: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class BalloonCount(BaseModel):
    """Requested balloons of one color (used by availability checks and restocks)."""
    small: int = Field(0, ge=0, description='11" balloons')
    large: int = Field(0, ge=0, description='16" balloons')


class MaterialSummary(BaseModel):
    """Aggregated material requirements for a set of design elements."""
    requirements: Dict[str, ColorCount] = Field(default_factory=dict)
    total_small: int = 0
    total_large: int = 0
    total_balloons: int = 0
    cluster_count: int = Field(0, description="Elements that contributed balloons")
    estimated_clusters: int = Field(0, description="ceil(total_balloons / 20)")
    production_time: str = Field("0.0 hrs")


class ColorShare(BaseModel):
    name: str
    percentage: float


class ColorAnalysis(BaseModel):
    """Share of each color in a design, largest first."""
    colors: List[ColorShare] = Field(default_factory=list)


class AvailabilityLine(BaseModel):
    """Requirement of one (color, size) compared with stock."""
    color: str
    size: str
    required: int
    available: int
    remaining: int = Field(..., description="Stock left after consumption; negative when short")
    threshold: Optional[int] = None
    status: str = Field(..., description="available | low | unavailable")


class ShortageLine(BaseModel):
    color: str
    size: str
    required: int
    available: int
    shortage: int


class AvailabilityReport(BaseModel):
    """Outcome of comparing requirements with inventory."""
    available: bool
    lines: List[AvailabilityLine] = Field(default_factory=list)
    shortages: List[ShortageLine] = Field(default_factory=list)
    message: str
